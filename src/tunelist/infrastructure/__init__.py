"""Infrastructure layer: persistence, observability and lifecycle."""
