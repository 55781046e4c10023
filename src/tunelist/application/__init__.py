"""Application layer: services orchestrating domain operations."""
