"""Request body schemas."""
