from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import PasswordHasher, get_password_hasher
from app.database import get_db
from app.services.timeline import TimelineStore
from app.services.users import UserStore
from app.services.viewers import ViewerCounter


def get_user_store(
    db: AsyncSession = Depends(get_db),
    passwords: PasswordHasher = Depends(get_password_hasher),
) -> UserStore:
    return UserStore(db, passwords)


def get_viewer_counter(db: AsyncSession = Depends(get_db)) -> ViewerCounter:
    return ViewerCounter(db)


def get_timeline(request: Request) -> TimelineStore:
    return request.app.state.timeline
