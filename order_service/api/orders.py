from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from order_service.clients.payment import PaymentClient
from order_service.clients.user_directory import UserDirectoryClient
from order_service.core.database import get_db
from order_service.repositories.order import OrderRepository
from order_service.services.order import OrderService
from order_service.schemas.order import OrderCreate, OrderResponse

router = APIRouter(prefix="/orders", tags=["orders"])


def get_user_directory(request: Request) -> UserDirectoryClient:
    return request.app.state.user_directory


def get_payment_client(request: Request) -> PaymentClient:
    return request.app.state.payment_client


def get_order_service(
    db: AsyncSession = Depends(get_db),
    user_directory: UserDirectoryClient = Depends(get_user_directory),
    payment_client: PaymentClient = Depends(get_payment_client)
) -> OrderService:
    repository = OrderRepository(db)
    return OrderService(repository, user_directory, payment_client)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_200_OK)
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
) -> OrderResponse:
    return await service.create_order(order_data)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
) -> OrderResponse:
    order = await service.get_order(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found"
        )
    return order
