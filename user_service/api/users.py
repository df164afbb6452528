import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.database import get_db
from user_service.models.user import User
from user_service.repositories.user import UserRepository
from user_service.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


@router.post("", response_model=UserResponse)
async def create_user(
    user_data: UserCreate,
    repository: UserRepository = Depends(get_user_repository)
) -> UserResponse:
    user = User(
        name=user_data.name,
        email=user_data.email,
        created_at=datetime.now(timezone.utc)
    )
    try:
        created = await repository.create(user)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user"
        ) from e

    logger.info(f"User created: {created.id}")
    return UserResponse.model_validate(created)


@router.get("/get", response_model=UserResponse)
async def get_user(
    user_id: int = Query(alias="id"),
    repository: UserRepository = Depends(get_user_repository)
) -> UserResponse:
    user = await repository.get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return UserResponse.model_validate(user)
