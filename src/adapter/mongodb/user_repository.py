"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.indexes import IndexSpec, apply_indexes
from domain.model.errors import DatabaseUnavailableError, DuplicateError
from domain.model.user import User

logger = getLogger(__name__)

_RESET_FIELDS = {'reset_password_token': '', 'reset_password_expire': ''}


class MongoUserRepository:
    INDEXES = (
        IndexSpec((('email', 1),), 'idx_users_email', {'unique': True}),
        IndexSpec((('reset_password_token', 1),), 'idx_users_reset_token', {'sparse': True}),
    )

    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        return apply_indexes(self.collection, self.INDEXES)

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            role=doc.get('role', 'user'),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            password_hash=doc.get('password_hash'),
            reset_password_token=doc.get('reset_password_token'),
            reset_password_expire=_as_utc(doc.get('reset_password_expire')),
        )

    def _fail(self, message: str, error: PyMongoError, **extra) -> DatabaseUnavailableError:
        logger.error(message, extra={**extra, "error": str(error)[:200]})
        return DatabaseUnavailableError("Database operation failed")

    def create(self, name: str, email: str, password_hash: str, role: str) -> User:
        """Create a new user and return the User object."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'name': name,
            'email': email,
            'role': role,
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError("Email already registered")
        except PyMongoError as e:
            raise self._fail("Failed to create user", e, email=email)

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            raise self._fail("Failed to get user by email", e, email=email)
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            raise self._fail("Failed to get user by ID", e, userId=user_id)
        return self._to_domain(doc) if doc else None

    def update_details(self, user_id: str, name: str | None = None, email: str | None = None) -> User | None:
        changes = {k: v for k, v in (('name', name), ('email', email)) if v is not None}
        changes['updated_at'] = datetime.now(timezone.utc)
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise DuplicateError("Email already registered")
        except PyMongoError as e:
            raise self._fail("Failed to update user details", e, userId=user_id)
        return self._to_domain(doc) if doc else None

    def update_password(self, user_id: str, password_hash: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'password_hash': password_hash, 'updated_at': datetime.now(timezone.utc)}},
            )
        except PyMongoError as e:
            raise self._fail("Failed to update password", e, userId=user_id)
        return result.matched_count > 0

    def set_reset_token(self, user_id: str, token_hash: str, expires_at: datetime) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'reset_password_token': token_hash, 'reset_password_expire': expires_at}},
            )
        except PyMongoError as e:
            raise self._fail("Failed to store reset token", e, userId=user_id)
        return result.matched_count > 0

    def clear_reset_token(self, user_id: str) -> bool:
        try:
            result = self.collection.update_one({'_id': user_id}, {'$unset': _RESET_FIELDS})
        except PyMongoError as e:
            raise self._fail("Failed to clear reset token", e, userId=user_id)
        return result.matched_count > 0

    def redeem_reset_token(self, token_hash: str, password_hash: str, now: datetime) -> User | None:
        try:
            doc = self.collection.find_one_and_update(
                {'reset_password_token': token_hash, 'reset_password_expire': {'$gt': now}},
                {
                    '$set': {'password_hash': password_hash, 'updated_at': now},
                    '$unset': _RESET_FIELDS,
                },
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._fail("Failed to redeem reset token", e)
        return self._to_domain(doc) if doc else None


def _as_utc(value: datetime | None) -> datetime | None:
    # pymongo hands back naive datetimes unless the client is tz_aware
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
