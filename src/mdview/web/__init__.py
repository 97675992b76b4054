"""HTTP handlers and route registration."""
