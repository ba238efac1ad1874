"""Infrastructure adapters for external providers."""
