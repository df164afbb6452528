import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from order_service.core.logging import setup_logging
from order_service.core.config import settings
from order_service.core.database import engine
from order_service.core.exceptions import BadRequest, OrderServiceError
from order_service.models import Base
from order_service.clients.payment import PaymentClient
from order_service.clients.user_directory import UserDirectoryClient
from order_service.api.orders import router as orders_router
from order_service.api.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.user_directory = UserDirectoryClient(
        settings.user_service_url,
        timeout=settings.http_timeout_seconds
    )
    app.state.payment_client = PaymentClient(
        settings.payment_service_url,
        timeout=settings.http_timeout_seconds
    )
    logger.info(f"Order service starting on :{settings.port}")

    yield

    await app.state.user_directory.close()
    await app.state.payment_client.close()
    await engine.dispose()
    logger.info("Order service stopped")


app = FastAPI(
    title="Order Service",
    description="Order creation across the user service and the payment processor",
    version="0.1.0",
    lifespan=lifespan
)

cors_origins = settings.cors_origins.split(",") if settings.cors_origins else ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = BadRequest("invalid request payload")
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": error.message, "errors": [
            {"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()
        ]}
    )


@app.exception_handler(OrderServiceError)
async def order_service_error_handler(request: Request, exc: OrderServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(health_router)
app.include_router(orders_router)


def run() -> None:
    import uvicorn

    uvicorn.run(
        "order_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
