from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field


class OrderCreate(BaseModel):
    user_id: int = Field(gt=0)
    product: str = Field(min_length=1, max_length=255)
    quantity: int = Field(gt=0)
    # matches the NUMERIC(10, 2) column; non-finite values are rejected
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class OrderResponse(BaseModel):
    id: int
    user_id: int
    product: str
    quantity: int
    amount: float
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentRequest(BaseModel):
    order_id: int
    amount: float
