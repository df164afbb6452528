from user_service.core.database import Base
from user_service.models.user import User

__all__ = ["Base", "User"]
