import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from order_service.clients.payment import PaymentClient
from order_service.clients.user_directory import UserDirectoryClient
from order_service.core.exceptions import (
    PaymentFailed,
    PersistenceFailed,
    StatusUpdateFailed,
    UserValidationFailed,
)
from order_service.models.order import Order, OrderStatus
from order_service.repositories.order import OrderRepository
from order_service.schemas.order import OrderCreate, OrderResponse

logger = logging.getLogger(__name__)


class OrderService:
    """Creates orders across the user service, the order store and the payment processor.

    Steps run strictly in the order validate, insert, pay, finalize. Each
    store write commits on its own; no transaction spans the insert and the
    status update, so a concurrent reader may observe ``pending`` until the
    payment outcome is written.
    """

    def __init__(
        self,
        repository: OrderRepository,
        user_directory: UserDirectoryClient,
        payment_client: PaymentClient
    ) -> None:
        self.repository = repository
        self.user_directory = user_directory
        self.payment_client = payment_client

    async def create_order(self, order_data: OrderCreate) -> OrderResponse:
        try:
            await self.user_directory.validate_user(order_data.user_id)
        except UserValidationFailed as e:
            logger.info(f"Order rejected, user {order_data.user_id} failed validation: {e.message}")
            raise

        order = Order(
            user_id=order_data.user_id,
            product=order_data.product,
            quantity=order_data.quantity,
            amount=order_data.amount,
            status=OrderStatus.PENDING.value,
            created_at=datetime.now(timezone.utc)
        )

        try:
            created_order = await self.repository.create(order)
        except SQLAlchemyError as e:
            logger.error(f"Failed to persist order for user {order_data.user_id}: {e}", exc_info=True)
            raise PersistenceFailed("failed to persist order") from e

        # Snapshot before any further write; a failed update expires the ORM instance.
        pending = OrderResponse.model_validate(created_order)
        logger.info(f"Order created: {pending.id}, status: {pending.status}")

        final_status = OrderStatus.COMPLETED
        try:
            await self.payment_client.process_payment(pending.id, pending.amount)
        except PaymentFailed as e:
            logger.warning(f"Payment failed for order {pending.id}: {e.message}")
            final_status = OrderStatus.PAYMENT_FAILED
        except Exception as e:
            logger.error(f"Payment errored for order {pending.id}: {type(e).__name__}: {e}", exc_info=True)
            final_status = OrderStatus.PAYMENT_FAILED

        try:
            await self._finalize(pending.id, final_status)
        except StatusUpdateFailed as e:
            logger.error(f"Order {pending.id} status not persisted as {final_status.value}: {e.message}")

        logger.info(f"Order finalized: {pending.id}, status: {final_status.value}")
        return pending.model_copy(update={"status": final_status.value})

    async def get_order(self, order_id: int) -> Optional[OrderResponse]:
        order = await self.repository.get_by_id(order_id)
        if not order:
            return None

        return OrderResponse.model_validate(order)

    async def _finalize(self, order_id: int, status: OrderStatus) -> None:
        try:
            updated = await self.repository.update_status(order_id, status)
        except SQLAlchemyError as e:
            raise StatusUpdateFailed(f"{type(e).__name__}: {e}") from e

        if not updated:
            raise StatusUpdateFailed(f"order {order_id} is no longer pending")
