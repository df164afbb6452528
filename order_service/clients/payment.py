import logging
from typing import Optional

import httpx

from order_service.core.exceptions import PaymentFailed
from order_service.schemas.order import PaymentRequest

logger = logging.getLogger(__name__)


class PaymentClient:
    """Client for ``POST /payments`` on the payment processor. No retries."""

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

    async def process_payment(self, order_id: int, amount: float) -> None:
        payload = PaymentRequest(order_id=order_id, amount=amount)

        try:
            response = await self.client.post(
                f"{self.base_url}/payments",
                json=payload.model_dump()
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Payment service timed out for order {order_id}: {e}")
            raise PaymentFailed(f"payment service unavailable: timeout after {self.timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"Payment service unreachable for order {order_id}: {e}")
            raise PaymentFailed(f"payment service unavailable: {e}") from e

        if response.status_code != httpx.codes.OK:
            logger.info(f"Payment for order {order_id} rejected with status {response.status_code}")
            raise PaymentFailed("payment failed")
