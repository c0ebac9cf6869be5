"""
Centralized configuration module for application-wide settings.

Values are read from environment variables through small getter
functions so tests can override them with monkeypatch before the
application factory runs.
"""

import logging
import os

logger = logging.getLogger(__name__)

WEAK_SECRETS = ("dev-secret-change-me", "dev-jwt-secret-change-me", "secret123")


def is_production() -> bool:
    return os.getenv("FLASK_ENV", "development") == "production"


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Invalid integer in {name}; falling back to default",
            extra={"context": {"value": raw, "default": default}},
        )
        return default


# ===========================
# Database Configuration
# ===========================


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL.

    Environment Variables:
        DATABASE_URL: Any SQLAlchemy URL
            Default: 'sqlite:///./storefront.db' (local development)
    """
    return os.getenv("DATABASE_URL", "sqlite:///./storefront.db")


# ===========================
# Security Configuration
# ===========================


def get_jwt_secret_key() -> str:
    """Get JWT secret key with production validation.

    Raises:
        ValueError: If production deployment uses weak or missing JWT secret
    """
    secret = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    if is_production() and (secret in WEAK_SECRETS or len(secret) < 32):
        raise ValueError(
            "Production deployment requires strong JWT_SECRET_KEY (min 32 chars). "
            "Set JWT_SECRET_KEY environment variable."
        )

    return secret


def get_jwt_expiration_hours() -> int:
    return _get_int("JWT_EXPIRATION_HOURS", 24)


def get_bcrypt_rounds() -> int:
    """
    Environment Variables:
        BCRYPT_ROUNDS: bcrypt cost factor (4-31)
            Default: 12
            Tests: 4, to keep hashing fast
    """
    rounds = _get_int("BCRYPT_ROUNDS", 12)
    return min(max(rounds, 4), 31)


# ===========================
# Pagination Configuration
# ===========================


def get_default_lines_per_page() -> int:
    return _get_int("DEFAULT_LINES_PER_PAGE", 12)


# ===========================
# Mail Configuration
# ===========================


def get_mail_backend() -> str:
    """
    Environment Variables:
        MAIL_BACKEND: 'log' writes messages to the application log,
            'smtp' delivers them through SMTP_HOST.
            Default: 'log'
    """
    return os.getenv("MAIL_BACKEND", "log").strip().lower()


def get_mail_sender() -> str:
    return os.getenv("MAIL_SENDER", "no-reply@storefront.local")


def get_smtp_settings() -> dict:
    return {
        "host": os.getenv("SMTP_HOST", "localhost"),
        "port": _get_int("SMTP_PORT", 587),
        "username": os.getenv("SMTP_USERNAME"),
        "password": os.getenv("SMTP_PASSWORD"),
        "use_tls": os.getenv("SMTP_USE_TLS", "true").lower() in ("true", "1", "yes"),
        "timeout": _get_int("SMTP_TIMEOUT", 10),
    }


# ===========================
# Rate Limiting Configuration
# ===========================


def get_rate_limit_enabled() -> bool:
    return os.getenv("RATE_LIMIT_ENABLED", "1").strip().lower() in ("1", "true", "yes")


def log_security_config():
    """
    Log the active security configuration (never the secrets themselves).

    Should be called during application startup.
    """
    logger.info(
        "Security configuration initialized",
        extra={
            "context": {
                "jwt_expiration_hours": get_jwt_expiration_hours(),
                "jwt_secret_from_env": bool(os.getenv("JWT_SECRET_KEY")),
                "bcrypt_rounds": get_bcrypt_rounds(),
                "mail_backend": get_mail_backend(),
                "environment": os.getenv("FLASK_ENV", "development"),
            }
        },
    )
