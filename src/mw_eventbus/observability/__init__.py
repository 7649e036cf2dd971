"""Observability – request context and structured logging."""
