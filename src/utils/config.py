"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass

DEFAULT_JWT_EXPIRE_DAYS = 30
DEFAULT_COOKIE_EXPIRE_DAYS = 30
DEFAULT_RESET_TOKEN_EXPIRE_MINUTES = 10


@dataclass(frozen=True)
class AuthSettings:
    """Explicit configuration for token issuance, cookies and outbound mail.

    Built once at startup and passed to collaborators, so nothing below the
    API layer reads process environment directly.
    """
    jwt_secret: str
    jwt_algorithm: str = 'HS256'
    jwt_expire_days: int = DEFAULT_JWT_EXPIRE_DAYS
    cookie_expire_days: int = DEFAULT_COOKIE_EXPIRE_DAYS
    production: bool = False
    reset_token_expire_minutes: int = DEFAULT_RESET_TOKEN_EXPIRE_MINUTES
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    from_email: str = 'noreply@bootcamp.local'
    from_name: str = 'Bootcamp API'


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_settings() -> AuthSettings:
    """Build AuthSettings from the environment.

    Raises:
        ValueError: JWT_SECRET is missing or a numeric variable is malformed
    """
    secret = os.getenv('JWT_SECRET')
    if not secret:
        raise ValueError(
            "JWT_SECRET environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    return AuthSettings(
        jwt_secret=secret,
        jwt_expire_days=_int_env('JWT_EXPIRE_DAYS', DEFAULT_JWT_EXPIRE_DAYS),
        cookie_expire_days=_int_env('JWT_COOKIE_EXPIRE_DAYS', DEFAULT_COOKIE_EXPIRE_DAYS),
        production=os.getenv('APP_ENV', 'development').lower() == 'production',
        reset_token_expire_minutes=_int_env('RESET_TOKEN_EXPIRE_MINUTES', DEFAULT_RESET_TOKEN_EXPIRE_MINUTES),
        smtp_host=os.getenv('SMTP_HOST'),
        smtp_port=_int_env('SMTP_PORT', 587),
        smtp_user=os.getenv('SMTP_USER'),
        smtp_password=os.getenv('SMTP_PASSWORD'),
        from_email=os.getenv('FROM_EMAIL', 'noreply@bootcamp.local'),
        from_name=os.getenv('FROM_NAME', 'Bootcamp API'),
    )
