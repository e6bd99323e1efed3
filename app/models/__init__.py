from app.models.user import Role, User
from app.models.viewer_counter import ViewerCount

__all__ = [
    "Role",
    "User",
    "ViewerCount",
]
