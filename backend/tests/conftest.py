"""Root conftest — shared test configuration."""

import os

# Ensure tests never pick up a real secret or identity provider
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("AUTH_BACKEND", "jwt")
os.environ.setdefault("LOG_FORMAT", "text")
