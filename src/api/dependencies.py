from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.external.smtp_email import SmtpEmailSender
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.bootcamp_repository import MongoBootcampRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.bootcamp_repository import BootcampRepository
from port.email_sender import EmailSender
from port.user_repository import UserRepository
from services.reset_tokens import ResetTokenManager
from services.session_tokens import SessionTokenIssuer
from utils.config import AuthSettings, load_settings


@lru_cache
def get_settings() -> AuthSettings:
    return load_settings()


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_bootcamp_repo() -> BootcampRepository:
    return MongoBootcampRepository(_get_db())


def get_token_issuer(settings: AuthSettings = Depends(get_settings)) -> SessionTokenIssuer:
    return SessionTokenIssuer(settings)


def get_reset_tokens(
    repo: UserRepository = Depends(get_user_repo),
    settings: AuthSettings = Depends(get_settings),
) -> ResetTokenManager:
    return ResetTokenManager(repo, expire_minutes=settings.reset_token_expire_minutes)


def get_email_sender(settings: AuthSettings = Depends(get_settings)) -> EmailSender:
    return SmtpEmailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_password,
        from_email=settings.from_email,
        from_name=settings.from_name,
    )
