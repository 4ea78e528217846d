from app.models.user import User
from app.models.resume import Resume

__all__ = ["User", "Resume"]
