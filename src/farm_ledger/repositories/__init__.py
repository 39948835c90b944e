"""Database access wrappers."""
