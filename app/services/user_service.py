"""
app/services/user_service.py

Purpose: User data management

- List, create, replace and delete user records
- Translates driver failures into StorageError
- Reports unknown ids as NotFoundError
"""

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.db.mongo import get_users_collection
from app.core.exceptions import NotFoundError, StorageError
from app.core.logging import get_logger, LogContext
from app.models.user import serialize_user
from app.schemas.user import UserPayload
from utils.constants import USER_NOT_FOUND_MESSAGE
from utils.validation_utils import is_valid_object_id
from typing import Any, Dict, List

logger = get_logger(__name__)


def _object_id(user_id: str) -> ObjectId:
    """
    Parses a path id. A malformed id cannot name any record,
    so it is reported the same way as a missing one.
    """
    if not is_valid_object_id(user_id):
        logger.info(f"Rejected malformed user id: {user_id!r}")
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return ObjectId(user_id)


async def list_users() -> List[Dict[str, Any]]:
    """
    Retrieves every user record.

    Returns:
        List of serialized user records

    Raises:
        StorageError: If MongoDB is unreachable
    """
    users = get_users_collection()

    try:
        documents = await users.find().to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Failed to list users: {e}", exc_info=True)
        raise StorageError(str(e)) from e

    logger.debug(f"Listed {len(documents)} users")
    return [serialize_user(doc) for doc in documents]


async def create_user(payload: UserPayload) -> Dict[str, Any]:
    """
    Inserts a new user; MongoDB assigns the id.

    Args:
        payload: Validated user fields

    Returns:
        The created record including its id

    Raises:
        StorageError: If the insert fails
    """
    users = get_users_collection()
    document = payload.to_document()

    try:
        result = await users.insert_one(document)
    except PyMongoError as e:
        logger.error(f"Failed to create user: {e}", exc_info=True)
        raise StorageError(str(e)) from e

    document["_id"] = result.inserted_id
    logger.info("User created", extra={"user_id": str(result.inserted_id)})
    return serialize_user(document)


async def update_user(user_id: str, payload: UserPayload) -> Dict[str, Any]:
    """
    Replaces every field of an existing user except the id.

    Args:
        user_id: Hex ObjectId of the user
        payload: Replacement fields

    Returns:
        The record as it is after the replacement

    Raises:
        NotFoundError: If no user has that id
        StorageError: If the update fails
    """
    with LogContext(user_id=user_id):
        oid = _object_id(user_id)
        users = get_users_collection()

        try:
            updated = await users.find_one_and_replace(
                {"_id": oid},
                payload.to_document(),
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            logger.error(f"Failed to update user: {e}", exc_info=True)
            raise StorageError(str(e)) from e

        if updated is None:
            logger.warning("Update for unknown user")
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        logger.info("User updated")
        return serialize_user(updated)


async def delete_user(user_id: str) -> Dict[str, Any]:
    """
    Deletes a user.

    Args:
        user_id: Hex ObjectId of the user

    Returns:
        The record as it was before deletion

    Raises:
        NotFoundError: If no user has that id
        StorageError: If the delete fails
    """
    with LogContext(user_id=user_id):
        oid = _object_id(user_id)
        users = get_users_collection()

        try:
            deleted = await users.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Failed to delete user: {e}", exc_info=True)
            raise StorageError(str(e)) from e

        if deleted is None:
            logger.warning("Delete for unknown user")
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        logger.info("User deleted")
        return serialize_user(deleted)
