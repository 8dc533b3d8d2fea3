"""MongoDB implementation of UserRepository."""

import uuid
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, StorageError
from domain.model.user import DEFAULT_ROLE, User, utcnow

logger = getLogger(__name__)


def _bumped_updated_at() -> dict:
    """Pipeline expression: max(now, previous updated_at + 1ms)."""
    return {'$max': [utcnow(), {'$add': ['$updated_at', 1]}]}


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            first_name=doc.get('first_name', ''),
            last_name=doc.get('last_name', ''),
            role=doc.get('role') or DEFAULT_ROLE,
        )

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str = '',
        last_name: str = '',
        role: str = DEFAULT_ROLE,
    ) -> User:
        """Create a new user and return the User object."""
        user_id = uuid.uuid4().hex
        now = utcnow()
        user_doc = {
            '_id': user_id,
            'email': email,
            'password_hash': password_hash,
            'first_name': first_name,
            'last_name': last_name,
            'role': role,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError()
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise StorageError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise StorageError("Failed to get user by email") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to get user by ID") from e
        return self._to_domain(doc) if doc else None

    def list_all(self) -> list[User]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find()]
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise StorageError("Failed to list users") from e

    def update(self, user_id: str, fields: dict) -> User | None:
        """Set the given fields and bump updated_at atomically.

        Uses an update pipeline so updated_at can be computed from the
        stored value; user values are wrapped in $literal so strings that
        start with '$' are not read as field paths.
        """
        patch = {key: {'$literal': value} for key, value in fields.items()}
        patch['updated_at'] = _bumped_updated_at()
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                [{'$set': patch}],
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            logger.warning("User update failed: email already exists", extra={"userId": user_id})
            raise DuplicateError()
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to update user") from e

        if not doc:
            return None
        logger.info("User updated", extra={"userId": user_id, "fields": sorted(fields)})
        return self._to_domain(doc)

    def update_password(self, user_id: str, password_hash: str) -> bool:
        """Replace the password hash. Return True if the user existed."""
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                [{'$set': {'password_hash': {'$literal': password_hash}, 'updated_at': _bumped_updated_at()}}],
            )
        except PyMongoError as e:
            logger.error("Failed to update password", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to update password") from e

        if result.matched_count == 1:
            logger.info("Password changed", extra={"userId": user_id})
            return True
        return False

    def delete(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to delete user") from e

        if result.deleted_count == 1:
            logger.info("User deleted", extra={"userId": user_id})
            return True
        return False
