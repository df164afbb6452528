from order_service.core.database import Base
from order_service.models.order import Order, OrderStatus

__all__ = ["Base", "Order", "OrderStatus"]
