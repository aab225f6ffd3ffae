from datetime import datetime
from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, name: str, email: str, password_hash: str, role: str) -> User:
        """Create a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update_details(self, user_id: str, name: str | None = None, email: str | None = None) -> User | None:
        """Update name and/or email. Return the updated User or None if not found.

        Raise DuplicateError if the new email belongs to another user.
        """
        ...

    def update_password(self, user_id: str, password_hash: str) -> bool:
        """Replace the stored password hash. Return True if a user was updated."""
        ...

    def set_reset_token(self, user_id: str, token_hash: str, expires_at: datetime) -> bool:
        """Store a pending reset token hash and its expiry. Return True if successful."""
        ...

    def clear_reset_token(self, user_id: str) -> bool:
        """Remove any pending reset token. Return True if a user was updated."""
        ...

    def redeem_reset_token(self, token_hash: str, password_hash: str, now: datetime) -> User | None:
        """Atomically consume a pending reset token.

        Matches the user whose stored token hash equals token_hash and whose
        expiry is later than now, sets the new password hash and clears both
        reset fields. Return the updated User or None if nothing matched.
        """
        ...
