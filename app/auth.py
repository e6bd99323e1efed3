import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from app.exceptions import Forbidden, TokenError, TokenExpired, TokenInvalid
from app.models.user import Role
from app.schemas.user import TokenIdentity

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class PasswordHasher:
    """bcrypt hashing with a per-application cost factor."""

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify(self, plain: str, hashed: str) -> bool:
        return self.pwd_context.verify(plain, hashed)

    def dummy_verify(self, plain: str) -> None:
        """Spend one bcrypt check, so unknown usernames cost as much as wrong passwords."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("robusphere-dummy-password")
        self.pwd_context.verify(plain, self._dummy_hash)


class TokenService:
    """Issues and verifies stateless HS256 session tokens carrying username and role."""

    algorithm = "HS256"

    def __init__(self, secret_key: str, expire_minutes: int = 60):
        self.secret_key = secret_key
        self.expire_minutes = expire_minutes

    def issue(self, username: str, role: Role | str, expires_delta: timedelta | None = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        claims = {"sub": username, "role": Role(role).value, "exp": expire}
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenIdentity:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
        except ExpiredSignatureError:
            raise TokenExpired("Token expired")
        except JWTError:
            raise TokenInvalid("Invalid token")

        try:
            return TokenIdentity(username=payload.get("sub"), role=payload.get("role"))
        except ValidationError:
            raise TokenInvalid("Token is missing identity claims")


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.passwords


async def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenIdentity:
    # HTTPBearer yields None for an absent header or a non-bearer scheme
    if credentials is None:
        raise Forbidden()
    try:
        identity = tokens.verify(credentials.credentials)
    except TokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise Forbidden() from exc
    request.state.identity = identity
    return identity


async def require_admin(identity: TokenIdentity = Depends(get_current_identity)) -> TokenIdentity:
    if identity.role != Role.ADMIN:
        raise Forbidden()
    return identity
