"""In-memory implementation of BootcampRepository for testing."""

import uuid
from datetime import datetime, timezone

from domain.model.bootcamp import Bootcamp
from domain.model.errors import DuplicateError


class FakeBootcampRepository:
    def __init__(self):
        self.store: dict[str, Bootcamp] = {}

    def _name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        return any(b.name == name and b.id != exclude_id for b in self.store.values())

    # ── write operations ─────────────────────────────────────

    def create(self, user_id: str, fields: dict) -> Bootcamp:
        if self._name_taken(fields['name']):
            raise DuplicateError(f"Bootcamp named '{fields['name']}' already exists")

        bootcamp_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        bootcamp = Bootcamp(
            id=bootcamp_id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.store[bootcamp_id] = bootcamp
        return bootcamp

    def update(self, bootcamp_id: str, fields: dict) -> Bootcamp | None:
        bootcamp = self.store.get(bootcamp_id)
        if not bootcamp:
            return None
        if 'name' in fields and self._name_taken(fields['name'], exclude_id=bootcamp_id):
            raise DuplicateError(f"Bootcamp named '{fields['name']}' already exists")

        for key, value in fields.items():
            setattr(bootcamp, key, value)
        bootcamp.updated_at = datetime.now(timezone.utc)
        return bootcamp

    def delete(self, bootcamp_id: str) -> bool:
        return self.store.pop(bootcamp_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, bootcamp_id: str) -> Bootcamp | None:
        return self.store.get(bootcamp_id)

    def find_many(self, skip: int = 0, limit: int = 25) -> tuple[list[Bootcamp], int]:
        ordered = sorted(self.store.values(), key=lambda b: b.created_at, reverse=True)
        return ordered[skip:skip + limit], len(ordered)

    def count_by_user(self, user_id: str) -> int:
        return sum(1 for b in self.store.values() if b.user_id == user_id)
