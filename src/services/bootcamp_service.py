"""Bootcamp service — listing and ownership rules for bootcamps."""

import logging

from domain.model.bootcamp import CAREERS, Bootcamp
from domain.model.errors import NotFoundError, PermissionDeniedError, ValidationError
from domain.model.user import ROLE_ADMIN, User
from port.bootcamp_repository import BootcampRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def _validate_careers(fields: dict) -> None:
    unknown = [c for c in fields.get('careers') or [] if c not in CAREERS]
    if unknown:
        raise ValidationError(f"Unknown careers: {', '.join(unknown)}")


def _not_found(bootcamp_id: str) -> NotFoundError:
    return NotFoundError(f"Bootcamp not found with id of {bootcamp_id}")


def _check_owner(bootcamp: Bootcamp, user: User, action: str) -> None:
    if bootcamp.user_id != user.id and user.role != ROLE_ADMIN:
        raise PermissionDeniedError(f"User {user.id} is not authorized to {action} this bootcamp")


def list_bootcamps(repo: BootcampRepository, skip: int = 0, limit: int = 25) -> tuple[list[Bootcamp], int]:
    skip = max(0, skip)
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    return repo.find_many(skip=skip, limit=limit)


def get_bootcamp(repo: BootcampRepository, bootcamp_id: str) -> Bootcamp:
    bootcamp = repo.get_by_id(bootcamp_id)
    if not bootcamp:
        raise _not_found(bootcamp_id)
    return bootcamp


def create_bootcamp(repo: BootcampRepository, user: User, fields: dict) -> Bootcamp:
    """Create a bootcamp owned by user.

    Publishers may own a single bootcamp; admins are unrestricted.

    Raises:
        ValidationError: unknown career, or publisher already owns a bootcamp
        DuplicateError: name already taken
    """
    _validate_careers(fields)
    if user.role != ROLE_ADMIN and repo.count_by_user(user.id) > 0:
        raise ValidationError(f"The user with ID {user.id} has already published a bootcamp")

    return repo.create(user.id, fields)


def update_bootcamp(repo: BootcampRepository, user: User, bootcamp_id: str, fields: dict) -> Bootcamp:
    bootcamp = get_bootcamp(repo, bootcamp_id)
    _check_owner(bootcamp, user, 'update')
    _validate_careers(fields)
    if not fields:
        return bootcamp

    updated = repo.update(bootcamp_id, fields)
    if not updated:
        raise _not_found(bootcamp_id)
    return updated


def delete_bootcamp(repo: BootcampRepository, user: User, bootcamp_id: str) -> None:
    bootcamp = get_bootcamp(repo, bootcamp_id)
    _check_owner(bootcamp, user, 'delete')
    if not repo.delete(bootcamp_id):
        raise _not_found(bootcamp_id)
    logger.info("Bootcamp deleted", extra={"bootcampId": bootcamp_id, "userId": user.id})
