"""Keyset-paginated search over filesystem, provider and log audit events."""

__version__ = "0.1.0"
