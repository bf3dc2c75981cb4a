"""
app/client/api_client.py

Purpose: HTTP client for the users API

- One method per REST route
- Raises ApiClientError for transport failures and non-2xx responses
- No retries, no cancellation
"""

import httpx
from typing import Any, Dict, List, Optional
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# httpx default timeout; distinct from None, which disables timeouts
_DEFAULT = object()


class ApiClientError(Exception):
    """
    Raised when a request to the users API fails.

    Attributes:
        message: Server-provided message, or a description of the transport failure
        status_code: HTTP status, None when no response was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UsersApiClient:
    """
    Async client for the /users endpoints.

    Usage:
        async with UsersApiClient() as api:
            users = await api.list_users()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Any = _DEFAULT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        if timeout is _DEFAULT:
            timeout = settings.CLIENT_REQUEST_TIMEOUT
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "UsersApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiClientError(f"Request failed: {e}") from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                logger.error(f"{method} {path} returned a non-JSON body")
                raise ApiClientError(
                    "Response body is not valid JSON", status_code=response.status_code
                ) from e

        message = _error_message(response)
        logger.warning(f"{method} {path} returned {response.status_code}: {message}")
        raise ApiClientError(message, status_code=response.status_code)

    async def list_users(self) -> List[Dict[str, Any]]:
        """GET /users"""
        data = await self._request("GET", "/users")
        if not isinstance(data, list):
            raise ApiClientError("Unexpected response: expected a list of users")
        return data

    async def create_user(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST /users

        Returns:
            The created record (savedUser)
        """
        data = await self._request("POST", "/users", json=payload)
        return _unwrap(data, "savedUser")

    async def update_user(self, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        PUT /users/{id}

        Returns:
            The updated record (updatedUser)
        """
        data = await self._request("PUT", f"/users/{user_id}", json=payload)
        return _unwrap(data, "updatedUser")

    async def delete_user(self, user_id: str) -> Dict[str, Any]:
        """
        DELETE /users/{id}

        Returns:
            The deleted record (deletedUser)
        """
        data = await self._request("DELETE", f"/users/{user_id}")
        return _unwrap(data, "deletedUser")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


def _unwrap(data: Any, key: str) -> Dict[str, Any]:
    """Pulls the record out of a {message, <key>} envelope."""
    if not isinstance(data, dict) or not isinstance(data.get(key), dict):
        logger.error(f"Response is missing '{key}'")
        raise ApiClientError(f"Unexpected response: missing {key}")
    return data[key]
