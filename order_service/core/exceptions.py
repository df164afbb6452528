"""Order creation failures.

Raised by the clients and the service layer. The API layer maps the
``status_code`` of each error onto the HTTP response; ``PaymentFailed`` and
``StatusUpdateFailed`` are captured by the orchestrator and never reach the
caller as error responses.
"""

from fastapi import status


class OrderServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(OrderServiceError):
    """The request payload could not be parsed or failed field constraints."""

    status_code = status.HTTP_400_BAD_REQUEST


class UserValidationFailed(OrderServiceError):
    """The referenced user does not exist or the user service is unreachable."""

    status_code = status.HTTP_400_BAD_REQUEST


class PersistenceFailed(OrderServiceError):
    """The pending order could not be inserted."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PaymentFailed(OrderServiceError):
    """The payment processor rejected the charge or could not be reached.

    Recorded as ``payment_failed`` on the order; never turned into an error response.
    """


class StatusUpdateFailed(OrderServiceError):
    """The terminal status could not be written back to the store."""
