import logging

from fastapi import APIRouter, Depends

from app.auth import require_admin
from app.dependencies import get_user_store
from app.schemas.user import MessageResponse, TokenIdentity, UserCreate, UserRead
from app.services.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[UserRead])
async def list_users(users: UserStore = Depends(get_user_store), _: TokenIdentity = Depends(require_admin)):
    return await users.list()


@router.post("", response_model=MessageResponse)
async def add_user(
    body: UserCreate,
    users: UserStore = Depends(get_user_store),
    admin: TokenIdentity = Depends(require_admin),
):
    await users.create(body.username, body.password, body.resolved_role)
    logger.info("Admin %r added user %r", admin.username, body.username)
    return MessageResponse(message="User added")


@router.delete("/{username}", response_model=MessageResponse)
async def delete_user(
    username: str,
    users: UserStore = Depends(get_user_store),
    admin: TokenIdentity = Depends(require_admin),
):
    await users.delete(username)
    logger.info("Admin %r deleted user %r", admin.username, username)
    return MessageResponse(message="User deleted")
