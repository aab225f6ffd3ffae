from dataclasses import dataclass
from datetime import datetime

ROLE_USER = 'user'
ROLE_PUBLISHER = 'publisher'
ROLE_ADMIN = 'admin'

# Roles a caller may pick at registration; admin is granted out of band.
SELF_ASSIGNABLE_ROLES = (ROLE_USER, ROLE_PUBLISHER)


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    role: str = ROLE_USER
    password_hash: str | None = None
    reset_password_token: str | None = None
    reset_password_expire: datetime | None = None

    @property
    def has_pending_reset(self) -> bool:
        return self.reset_password_token is not None
