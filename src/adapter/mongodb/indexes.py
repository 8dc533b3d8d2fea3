"""MongoDB index management.

Index creation that survives a changed definition on redeploy, used by
MongoUserRepository.ensure_indexes() and the app lifespan.
"""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing any existing index it conflicts with.

    A conflict is an index with our name but other keys, or our keys
    under another name. Any other driver error propagates.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise

    conflicting = _find_conflicting(collection, dict(keys), name)
    if not conflicting:
        logger.error("Unresolvable index conflict", extra={"index": name})
        return False

    for idx_name in conflicting:
        logger.warning("Dropping conflicting index", extra={"index": idx_name})
        collection.drop_index(idx_name)
    collection.create_index(keys, name=name, **kwargs)
    logger.info("Recreated index", extra={"index": name})
    return True


def _find_conflicting(collection, keys: dict, name: str) -> list[str]:
    found = []
    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == keys
        if same_name != same_keys:
            found.append(idx_name)
    return found


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
