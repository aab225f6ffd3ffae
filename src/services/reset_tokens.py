"""One-time password reset tokens.

Per user the lifecycle is:

    no active reset -> pending (request_reset)
    pending -> no active reset (redeem, cancel, or expiry noticed at redeem time)

Only the sha256 hex digest of a token is persisted. The plaintext leaves the
service once, for out-of-band delivery. A new request overwrites any earlier
pending token, so only the most recent one can be redeemed.
"""

import hashlib
import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from domain.model.errors import InvalidOrExpiredTokenError
from domain.model.user import User
from port.user_repository import UserRepository
from services.password_hasher import hash_password
from utils.config import DEFAULT_RESET_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)

TOKEN_BYTES = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


class ResetTokenManager:
    def __init__(
        self,
        repo: UserRepository,
        expire_minutes: int = DEFAULT_RESET_TOKEN_EXPIRE_MINUTES,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repo = repo
        self.window = timedelta(minutes=expire_minutes)
        self.clock = clock

    def request_reset(self, user: User) -> str:
        """Start a reset for user and return the plaintext token."""
        token = secrets.token_hex(TOKEN_BYTES)
        token_hash = hash_token(token)
        expires_at = self.clock() + self.window

        self.repo.set_reset_token(user.id, token_hash, expires_at)
        user.reset_password_token = token_hash
        user.reset_password_expire = expires_at

        logger.info("Password reset requested", extra={"userId": user.id})
        return token

    def redeem(self, token: str, new_password: str) -> User:
        """Consume token and set new_password on its owner.

        Raises:
            InvalidOrExpiredTokenError: token unknown, already used, or expired
        """
        if not token:
            raise InvalidOrExpiredTokenError("Invalid token")

        user = self.repo.redeem_reset_token(hash_token(token), hash_password(new_password), self.clock())
        if not user:
            raise InvalidOrExpiredTokenError("Invalid token")

        logger.info("Password reset completed", extra={"userId": user.id})
        return user

    def cancel(self, user: User) -> None:
        """Drop a pending reset, e.g. when the token could not be delivered."""
        self.repo.clear_reset_token(user.id)
        user.reset_password_token = None
        user.reset_password_expire = None
        logger.info("Password reset cancelled", extra={"userId": user.id})
