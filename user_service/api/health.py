from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.database import get_db
from user_service.models.user import User

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)) -> dict[str, str | dict[str, str]]:
    health = {"status": "healthy", "checks": {}}

    # the users table must exist, not just the connection
    try:
        await db.execute(select(func.count()).select_from(User))
        health["checks"]["users_table"] = "healthy"
    except Exception as e:
        health["checks"]["users_table"] = f"unhealthy: {type(e).__name__}"
        health["status"] = "unhealthy"

    return health
