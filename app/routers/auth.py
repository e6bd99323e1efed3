import logging

from fastapi import APIRouter, Depends

from app.auth import TokenService, get_current_identity, get_token_service
from app.exceptions import Unauthorized, UserNotFound
from app.schemas.user import LoginRequest, MessageResponse, ProfileRead, TokenIdentity, TokenResponse, UserCreate
from app.services.users import UserStore
from app.dependencies import get_user_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=MessageResponse)
async def register(body: UserCreate, users: UserStore = Depends(get_user_store)):
    """Open self-registration. A requested "admin" role is honoured as-is."""
    await users.create(body.username, body.password, body.resolved_role)
    logger.info("Registered user %r with role %s", body.username, body.resolved_role.value)
    return MessageResponse(message="Registration successful")


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    users: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = await users.authenticate(body.username, body.password)
    if user is None:
        logger.info("Failed login for %r", body.username)
        raise Unauthorized()
    token = tokens.issue(user.username, user.role)
    return TokenResponse(token=token, username=user.username, role=user.role)


@router.get("/profile", response_model=ProfileRead)
async def profile(
    identity: TokenIdentity = Depends(get_current_identity),
    users: UserStore = Depends(get_user_store),
):
    user = await users.find_by_username(identity.username)
    if user is None:
        raise UserNotFound()
    joined = user.joined.isoformat() if user.joined else "N/A"
    return ProfileRead(username=user.username, role=user.role, joined=joined)
