"""Session authentication: token cookie handling and request guards."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Cookie, Depends, Response
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_token_issuer, get_user_repo
from domain.model.errors import AuthenticationError, InvalidTokenError, PermissionDeniedError
from domain.model.user import User
from port.user_repository import UserRepository
from services.session_tokens import SessionTokenIssuer
from utils.config import AuthSettings

logger = logging.getLogger(__name__)

TOKEN_COOKIE = 'token'

NOT_AUTHORIZED = "Not authorized to access this route"

security = HTTPBearer(auto_error=False)


def set_token_cookie(response: Response, token: str, settings: AuthSettings) -> None:
    """Attach the session token cookie; Secure only in production."""
    expires = datetime.now(timezone.utc) + timedelta(days=settings.cookie_expire_days)
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        expires=expires,
        httponly=True,
        secure=settings.production,
        samesite='lax',
        path='/',
    )


def clear_token_cookie(response: Response, settings: AuthSettings) -> None:
    response.delete_cookie(
        key=TOKEN_COOKIE,
        path='/',
        httponly=True,
        secure=settings.production,
        samesite='lax',
    )


def _extract_token(credentials: Optional[HTTPAuthorizationCredentials], cookie_token: Optional[str]) -> Optional[str]:
    # Authorization header wins over the cookie
    if credentials and credentials.credentials:
        return credentials.credentials
    if cookie_token and cookie_token != 'none':
        return cookie_token
    return None


def protect(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token: Optional[str] = Cookie(None),
    issuer: SessionTokenIssuer = Depends(get_token_issuer),
    user_repo: UserRepository = Depends(get_user_repo),
) -> User:
    """Resolve the authenticated user (required). Raises 401 if not authenticated."""
    raw = _extract_token(credentials, token)
    if not raw:
        raise AuthenticationError(NOT_AUTHORIZED)

    try:
        user_id = issuer.verify(raw)
    except InvalidTokenError as e:
        raise AuthenticationError(NOT_AUTHORIZED) from e

    user = user_repo.get_by_id(user_id)
    if not user:
        logger.debug("Token refers to a missing user", extra={"userId": user_id})
        raise AuthenticationError(NOT_AUTHORIZED)

    return user


def authorize(*roles: str):
    """Build a dependency that admits only users whose role is in roles."""

    def _check(user: User = Depends(protect)) -> User:
        if user.role not in roles:
            raise PermissionDeniedError(f"User role {user.role} is not authorized to access this route")
        return user

    return _check
