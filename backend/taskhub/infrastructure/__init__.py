"""Infrastructure Layer — collection storage, token validation and logging."""
