"""Declarative index definitions for the MongoDB repositories.

Each repository lists its indexes as ``IndexSpec`` values and hands them to
``apply_indexes`` at startup. An existing index that clashes with an ``IndexSpec``,
either by name or by key pattern, is dropped and rebuilt from it.
"""

from dataclasses import dataclass, field
from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import OperationFailure, PyMongoError

logger = getLogger(__name__)

# IndexOptionsConflict, IndexKeySpecsConflict
_CONFLICT_CODES = (85, 86)


@dataclass(frozen=True)
class IndexSpec:
    keys: tuple[tuple[str, int], ...]
    name: str
    options: dict = field(default_factory=dict)

    @property
    def key_list(self) -> list[tuple[str, int]]:
        return list(self.keys)


def _is_conflict(error: PyMongoError) -> bool:
    if isinstance(error, OperationFailure) and error.code in _CONFLICT_CODES:
        return True
    message = str(error)
    return "already exists" in message or "Conflict" in message


def _find_clash(collection: Collection, spec: IndexSpec) -> str | None:
    """Name of the existing index that shares exactly one of name / keys with spec."""
    for existing, info in collection.index_information().items():
        if existing == '_id_':
            continue
        if (existing == spec.name) != (dict(info.get('key', [])) == dict(spec.keys)):
            return existing
    return None


def create_index(collection: Collection, spec: IndexSpec) -> bool:
    """Create one index, rebuilding a clashing index when needed.

    Returns False when a conflict was reported but no clashing index could be
    found. Errors other than conflicts propagate.
    """
    try:
        collection.create_index(spec.key_list, name=spec.name, **spec.options)
        return True
    except PyMongoError as e:
        if not _is_conflict(e):
            raise

    clash = _find_clash(collection, spec)
    if clash is None:
        logger.error("Index conflict could not be resolved", extra={"index": spec.name})
        return False

    logger.warning("Rebuilding index", extra={"index": spec.name, "replaces": clash})
    collection.drop_index(clash)
    collection.create_index(spec.key_list, name=spec.name, **spec.options)
    return True


def apply_indexes(collection: Collection, specs: tuple[IndexSpec, ...]) -> bool:
    """Create every index in specs; False if any of them failed."""
    try:
        return all([create_index(collection, spec) for spec in specs])
    except PyMongoError as e:
        logger.error(
            "Failed to create indexes",
            extra={"collection": collection.name, "error": str(e)[:200]},
        )
        return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.bootcamp_repository import MongoBootcampRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoBootcampRepository(db).ensure_indexes(),
    ]
    return all(results)
