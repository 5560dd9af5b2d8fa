"""Application layer - use cases built on the spot request domain."""
