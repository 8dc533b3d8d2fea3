from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import StorageError
from port.user_repository import UserRepository
from services.account_service import AccountService


def _get_db():
    """Get MongoDB database, raising StorageError (served as 503) if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise StorageError("Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_account_service() -> AccountService:
    return AccountService(get_user_repo())
