"""HTTP client for the user service.

The order service only needs to know whether a user exists; the record body
returned by the user service is not inspected.
"""

import logging
from typing import Optional

import httpx

from order_service.core.exceptions import UserValidationFailed

logger = logging.getLogger(__name__)


class UserDirectoryClient:
    """
    Client for ``GET /users/get?id=<int>`` on the user service.

    Example:
        >>> client = UserDirectoryClient("http://localhost:8081", timeout=5.0)
        >>> await client.validate_user(1)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self.client.aclose()

    async def validate_user(self, user_id: int) -> None:
        """
        Confirm that ``user_id`` exists.

        Raises:
            UserValidationFailed: the service is unreachable, timed out, or
                answered with anything other than 200.
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/users/get",
                params={"id": user_id}
            )
        except httpx.TimeoutException as e:
            logger.warning(f"User service timed out validating user {user_id}: {e}")
            raise UserValidationFailed(f"user service unavailable: timeout after {self.timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"User service unreachable validating user {user_id}: {e}")
            raise UserValidationFailed(f"user service unavailable: {e}") from e

        if response.status_code != httpx.codes.OK:
            logger.info(f"User {user_id} rejected by user service with status {response.status_code}")
            raise UserValidationFailed("user not found")
