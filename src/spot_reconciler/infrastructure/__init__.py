"""Infrastructure layer - AWS and persistence adapters."""
