"""Configuration – settings, loaders and stream configuration."""
