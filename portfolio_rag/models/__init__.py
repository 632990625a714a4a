"""Domain models and API schemas."""
