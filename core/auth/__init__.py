"""Authentication and security context helpers."""
