import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_service.core.logging import setup_logging
from user_service.core.config import settings
from user_service.core.database import engine
from user_service.models import Base
from user_service.api.users import router as users_router
from user_service.api.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"User service starting on :{settings.port}")

    yield

    logger.info("Shutting down user service...")
    await engine.dispose()
    logger.info("User service stopped")


app = FastAPI(
    title="User Service",
    description="User directory consulted by the order service",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid request payload", "errors": [
            {"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()
        ]}
    )


app.include_router(health_router)
app.include_router(users_router)


def run() -> None:
    import uvicorn

    uvicorn.run(
        "user_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=5,
    )


if __name__ == "__main__":
    run()
