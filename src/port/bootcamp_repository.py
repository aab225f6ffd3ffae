from typing import Protocol
from domain.model.bootcamp import Bootcamp


class BootcampRepository(Protocol):
    """Protocol defining the interface for bootcamp data access."""
    def create(self, user_id: str, fields: dict) -> Bootcamp:
        """Create a bootcamp owned by user_id. Raise DuplicateError if the name is taken."""
        ...

    def get_by_id(self, bootcamp_id: str) -> Bootcamp | None:
        """Find a bootcamp by ID. Return Bootcamp or None if not found."""
        ...

    def find_many(self, skip: int = 0, limit: int = 25) -> tuple[list[Bootcamp], int]:
        """Return a page of bootcamps (newest first) and the total count."""
        ...

    def count_by_user(self, user_id: str) -> int:
        """Count bootcamps owned by a user."""
        ...

    def update(self, bootcamp_id: str, fields: dict) -> Bootcamp | None:
        """Apply a partial update. Return the updated Bootcamp or None if not found.

        Raise DuplicateError if a renamed bootcamp collides with another.
        """
        ...

    def delete(self, bootcamp_id: str) -> bool:
        """Delete a bootcamp. Return True if it existed."""
        ...
