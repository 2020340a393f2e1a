"""Infrastructure adapters: store sessions, logging and metrics."""
