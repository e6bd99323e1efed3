from app.schemas.user import (
    UserCreate,
    UserRead,
    ProfileRead,
    LoginRequest,
    TokenResponse,
    TokenIdentity,
    MessageResponse,
)
from app.schemas.timeline import TimelineEvent
from app.schemas.viewers import ViewerCountRead
