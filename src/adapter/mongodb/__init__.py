from adapter.mongodb.connection import (
    BOOTCAMPS_COLLECTION_NAME,
    DATABASE_NAME,
    USERS_COLLECTION_NAME,
)

__all__ = ['BOOTCAMPS_COLLECTION_NAME', 'DATABASE_NAME', 'USERS_COLLECTION_NAME']
