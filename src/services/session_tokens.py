"""Signed, time-limited session tokens (JWT)."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError
from utils.config import AuthSettings

logger = logging.getLogger(__name__)


class SessionTokenIssuer:
    """Issues and verifies JWTs that carry a user id in the ``sub`` claim."""

    def __init__(self, settings: AuthSettings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.lifetime = timedelta(days=settings.jwt_expire_days)

    def issue(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the user id encoded in token.

        Raises:
            InvalidTokenError: bad signature, expired, or no subject
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError("Invalid or expired session token") from e

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("Session token has no subject")
        return user_id
