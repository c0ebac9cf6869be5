"""
Central pytest configuration for the storefront tests.

Environment variables are set before any application module is imported
so the lazy engine, bcrypt cost and JWT secret pick up test values.
"""

import os

# Test database configuration (set early so the lazy engine uses it)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ["BCRYPT_ROUNDS"] = "4"  # Fast hashing
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-with-enough-length-0123"
os.environ["MAIL_BACKEND"] = "log"
os.environ["LOG_TO_FILE"] = "0"
os.environ.setdefault("FLASK_ENV", "development")

# Markers and fixtures shared by all test modules
from tests.config.markers import *  # noqa: E402,F401,F403
from tests.config.fixtures import *  # noqa: E402,F401,F403
