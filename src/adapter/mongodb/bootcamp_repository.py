"""MongoDB implementation of BootcampRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import BOOTCAMPS_COLLECTION_NAME
from adapter.mongodb.indexes import IndexSpec, apply_indexes
from domain.model.bootcamp import Bootcamp
from domain.model.errors import DatabaseUnavailableError, DuplicateError

logger = getLogger(__name__)


class MongoBootcampRepository:
    INDEXES = (
        IndexSpec((('name', 1),), 'idx_bootcamps_name', {'unique': True}),
        IndexSpec((('user_id', 1),), 'idx_bootcamps_user_id'),
        IndexSpec((('created_at', DESCENDING),), 'idx_bootcamps_created_at'),
    )

    def __init__(self, db: Database):
        self.collection = db[BOOTCAMPS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        return apply_indexes(self.collection, self.INDEXES)

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Bootcamp:
        """Convert MongoDB document to Bootcamp domain model."""
        return Bootcamp(
            id=doc['_id'],
            name=doc['name'],
            description=doc['description'],
            user_id=doc['user_id'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            website=doc.get('website'),
            phone=doc.get('phone'),
            email=doc.get('email'),
            address=doc.get('address'),
            careers=doc.get('careers', []),
            average_cost=doc.get('average_cost'),
            housing=doc.get('housing', False),
            job_assistance=doc.get('job_assistance', False),
            job_guarantee=doc.get('job_guarantee', False),
            accept_gi=doc.get('accept_gi', False),
        )

    def _fail(self, message: str, error: PyMongoError, **extra) -> DatabaseUnavailableError:
        logger.error(message, extra={**extra, "error": str(error)[:200]})
        return DatabaseUnavailableError("Database operation failed")

    # ── write operations ─────────────────────────────────────

    def create(self, user_id: str, fields: dict) -> Bootcamp:
        bootcamp_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        doc = {
            **fields,
            '_id': bootcamp_id,
            'user_id': user_id,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateError(f"Bootcamp named '{fields.get('name')}' already exists")
        except PyMongoError as e:
            raise self._fail("Failed to create bootcamp", e, userId=user_id)

        logger.info("Bootcamp created", extra={"bootcampId": bootcamp_id, "userId": user_id})
        return self._to_domain(doc)

    def update(self, bootcamp_id: str, fields: dict) -> Bootcamp | None:
        changes = {**fields, 'updated_at': datetime.now(timezone.utc)}
        try:
            doc = self.collection.find_one_and_update(
                {'_id': bootcamp_id},
                {'$set': changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise DuplicateError(f"Bootcamp named '{fields.get('name')}' already exists")
        except PyMongoError as e:
            raise self._fail("Failed to update bootcamp", e, bootcampId=bootcamp_id)
        return self._to_domain(doc) if doc else None

    def delete(self, bootcamp_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': bootcamp_id})
        except PyMongoError as e:
            raise self._fail("Failed to delete bootcamp", e, bootcampId=bootcamp_id)
        return result.deleted_count > 0

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, bootcamp_id: str) -> Bootcamp | None:
        try:
            doc = self.collection.find_one({'_id': bootcamp_id})
        except PyMongoError as e:
            raise self._fail("Failed to get bootcamp", e, bootcampId=bootcamp_id)
        return self._to_domain(doc) if doc else None

    def find_many(self, skip: int = 0, limit: int = 25) -> tuple[list[Bootcamp], int]:
        try:
            total = self.collection.count_documents({})
            cursor = self.collection.find({}).sort('created_at', DESCENDING).skip(skip).limit(limit)
            return [self._to_domain(doc) for doc in cursor], total
        except PyMongoError as e:
            raise self._fail("Failed to list bootcamps", e)

    def count_by_user(self, user_id: str) -> int:
        try:
            return self.collection.count_documents({'user_id': user_id})
        except PyMongoError as e:
            raise self._fail("Failed to count bootcamps", e, userId=user_id)
