"""
app/client/store.py

Purpose: Client-side user state

- Mirrors the user list fetched from the API
- Loading flag and transient success / error messages
- Re-fetches the full list after every successful write
- Success messages clear themselves after a fixed delay
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional

from app.client.api_client import ApiClientError, UsersApiClient
from app.client.form import UserForm
from app.core.config import settings
from app.core.logging import get_logger
from utils.constants import (
    CLIENT_CREATE_ERROR,
    CLIENT_CREATE_SUCCESS,
    CLIENT_DELETE_ERROR,
    CLIENT_DELETE_SUCCESS,
    CLIENT_FETCH_ERROR,
    CLIENT_UPDATE_ERROR,
    CLIENT_UPDATE_SUCCESS,
    DELETE_CONFIRM_PROMPT,
)

logger = get_logger(__name__)


class UserStore:
    """
    Local mirror of the users collection for a UI to render.

    Writes never touch `users` directly: a successful write re-fetches
    the whole list, a failed one leaves it as it was.
    """

    def __init__(self, api: UsersApiClient, message_timeout: Optional[float] = None):
        self.api = api
        self.message_timeout = (
            settings.CLIENT_MESSAGE_TIMEOUT_SECONDS if message_timeout is None else message_timeout
        )
        self.users: List[Dict[str, Any]] = []
        self.loading: bool = False
        self.error: str = ""
        self.success: str = ""
        self._clear_handle: Optional[asyncio.TimerHandle] = None

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _clear_messages(self):
        self.error = ""
        self._cancel_clear()
        self.success = ""

    def _cancel_clear(self):
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None

    def _clear_success(self):
        self._clear_handle = None
        self.success = ""

    def _set_success(self, message: str):
        self._cancel_clear()
        self.success = message
        loop = asyncio.get_running_loop()
        self._clear_handle = loop.call_later(self.message_timeout, self._clear_success)

    def close(self):
        """Cancel the pending message timer."""
        self._cancel_clear()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        """
        Loads the full user list.

        Returns:
            True if the list was fetched
        """
        self.loading = True
        self.error = ""
        try:
            self.users = await self.api.list_users()
            return True
        except ApiClientError as e:
            logger.error(f"Error fetching users: {e.message}")
            self.error = CLIENT_FETCH_ERROR
            return False
        finally:
            self.loading = False

    async def create(self, payload: Dict[str, Any]) -> bool:
        """Creates a user, then re-fetches the list."""
        self._clear_messages()
        try:
            await self.api.create_user(payload)
        except ApiClientError as e:
            logger.error(f"Error creating user: {e.message}")
            self.error = CLIENT_CREATE_ERROR
            return False

        self._set_success(CLIENT_CREATE_SUCCESS)
        await self.refresh()
        return True

    async def update(self, user_id: str, payload: Dict[str, Any]) -> bool:
        """Replaces a user's fields, then re-fetches the list."""
        self._clear_messages()
        try:
            await self.api.update_user(user_id, payload)
        except ApiClientError as e:
            logger.error(f"Error updating user {user_id}: {e.message}")
            self.error = CLIENT_UPDATE_ERROR
            return False

        self._set_success(CLIENT_UPDATE_SUCCESS)
        await self.refresh()
        return True

    async def delete(
        self,
        user_id: str,
        confirm: Optional[Callable[[str], bool]] = None,
        name: str = "",
    ) -> bool:
        """
        Deletes a user, then re-fetches the list.

        Args:
            user_id: Id of the record to delete
            confirm: Called with a prompt; a falsy answer aborts without a request
            name: Display name used in the prompt
        """
        if confirm is not None and not confirm(DELETE_CONFIRM_PROMPT.format(name=name)):
            logger.debug(f"Delete of {user_id} cancelled")
            return False

        self._clear_messages()
        try:
            await self.api.delete_user(user_id)
        except ApiClientError as e:
            logger.error(f"Error deleting user {user_id}: {e.message}")
            self.error = CLIENT_DELETE_ERROR
            return False

        self._set_success(CLIENT_DELETE_SUCCESS)
        await self.refresh()
        return True

    async def submit(self, form: UserForm) -> bool:
        """
        Sends a form: update when it is editing a record, create otherwise.
        """
        editing_id = form.editing_id
        payload = form.begin_submit()

        success = False
        try:
            if editing_id is not None:
                success = await self.update(editing_id, payload)
            else:
                success = await self.create(payload)
        finally:
            form.finish_submit(success)
        return success
