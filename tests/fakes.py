from order_service.core.exceptions import PaymentFailed, UserValidationFailed


class FakeUserDirectory:
    def __init__(self, known_users=(1,)) -> None:
        self.known_users = set(known_users)
        self.unavailable = False
        self.calls = []

    async def validate_user(self, user_id: int) -> None:
        self.calls.append(user_id)
        if self.unavailable:
            raise UserValidationFailed("user service unavailable: connection refused")
        if user_id not in self.known_users:
            raise UserValidationFailed("user not found")


class FakePaymentClient:
    def __init__(self) -> None:
        self.succeed = True
        self.error = None
        self.calls = []
        self.on_call = None

    async def process_payment(self, order_id: int, amount: float) -> None:
        self.calls.append({"order_id": order_id, "amount": amount})
        if self.on_call is not None:
            await self.on_call(order_id)
        if self.error is not None:
            raise self.error
        if not self.succeed:
            raise PaymentFailed("payment failed")
