"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone
from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, name: str, email: str, password_hash: str, role: str) -> User:
        if self.get_by_email(email):
            raise DuplicateError("Email already registered")

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            name=name,
            email=email,
            role=role,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return user

    def update_details(self, user_id: str, name: str | None = None, email: str | None = None) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        if email is not None:
            other = self.get_by_email(email)
            if other and other.id != user_id:
                raise DuplicateError("Email already registered")
            user.email = email
        if name is not None:
            user.name = name
        user.updated_at = datetime.now(timezone.utc)
        return user

    def update_password(self, user_id: str, password_hash: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.password_hash = password_hash
        user.updated_at = datetime.now(timezone.utc)
        return True

    def set_reset_token(self, user_id: str, token_hash: str, expires_at: datetime) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.reset_password_token = token_hash
        user.reset_password_expire = expires_at
        return True

    def clear_reset_token(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.reset_password_token = None
        user.reset_password_expire = None
        return True

    def redeem_reset_token(self, token_hash: str, password_hash: str, now: datetime) -> User | None:
        for user in self.store.values():
            if user.reset_password_token != token_hash:
                continue
            if user.reset_password_expire is None or user.reset_password_expire <= now:
                return None
            user.password_hash = password_hash
            user.reset_password_token = None
            user.reset_password_expire = None
            user.updated_at = now
            return user
        return None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)
