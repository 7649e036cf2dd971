"""Adapters – transport and producer integrations."""
