"""
app/api/users.py

Purpose: REST endpoints for user records

- GET    /users       -> list all users
- POST   /users       -> create a user
- PUT    /users/{id}  -> replace a user's fields
- DELETE /users/{id}  -> delete a user

Errors raised by the service layer are rendered by the
handlers in app/core/errors.py.
"""

from fastapi import APIRouter, status
from typing import Any, Dict, List

from app.core.logging import get_logger
from app.schemas.response import ErrorResponse
from app.schemas.user import (
    UserPayload,
    UserCreatedResponse,
    UserUpdatedResponse,
    UserDeletedResponse,
)
from app.services import user_service
from utils.constants import (
    USER_CREATED_MESSAGE,
    USER_UPDATED_MESSAGE,
    USER_DELETED_MESSAGE,
)

logger = get_logger(__name__)
router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed body"},
    404: {"model": ErrorResponse, "description": "User not found"},
    500: {"model": ErrorResponse, "description": "Storage error"},
}


@router.get("/users", response_model=List[Dict[str, Any]], responses={500: ERROR_RESPONSES[500]})
async def list_users():
    """Fetch all users."""
    return await user_service.list_users()


@router.post(
    "/users",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
)
async def create_user(payload: UserPayload):
    """Insert a new user."""
    saved = await user_service.create_user(payload)
    return UserCreatedResponse(message=USER_CREATED_MESSAGE, savedUser=saved)


@router.put("/users/{user_id}", response_model=UserUpdatedResponse, responses=ERROR_RESPONSES)
async def update_user(user_id: str, payload: UserPayload):
    """Replace a user's fields by id."""
    updated = await user_service.update_user(user_id, payload)
    return UserUpdatedResponse(message=USER_UPDATED_MESSAGE, updatedUser=updated)


@router.delete(
    "/users/{user_id}",
    response_model=UserDeletedResponse,
    responses={404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
)
async def delete_user(user_id: str):
    """Delete a user by id."""
    deleted = await user_service.delete_user(user_id)
    return UserDeletedResponse(message=USER_DELETED_MESSAGE, deletedUser=deleted)
