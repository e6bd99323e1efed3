import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import PasswordHasher
from app.exceptions import UserAlreadyExists, UserNotFound
from app.models.user import Role, User
from app.schemas.user import UserRead

logger = logging.getLogger(__name__)


class UserStore:
    """User records keyed by unique username."""

    def __init__(self, db: AsyncSession, passwords: PasswordHasher):
        self.db = db
        self.passwords = passwords

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(self, username: str, password: str, role: Role = Role.USER) -> User:
        if await self.find_by_username(username):
            raise UserAlreadyExists()
        user = User(
            username=username,
            password_hash=self.passwords.hash(password),
            role=Role(role).value,
            joined=datetime.now(timezone.utc),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same username
            await self.db.rollback()
            raise UserAlreadyExists() from exc
        return user

    async def list(self) -> list[UserRead]:
        result = await self.db.execute(select(User).order_by(User.id))
        return [UserRead.model_validate(user) for user in result.scalars().all()]

    async def delete(self, username: str) -> None:
        user = await self.find_by_username(username)
        if user is None:
            raise UserNotFound()
        await self.db.delete(user)
        await self.db.commit()

    async def authenticate(self, username: str, password: str) -> User | None:
        user = await self.find_by_username(username)
        if user is None:
            self.passwords.dummy_verify(password)
            return None
        if not self.passwords.verify(password, user.password_hash):
            return None
        return user

    async def ensure_admin(self, username: str, password: str) -> None:
        """Seed the default admin account. It carries no join date."""
        if await self.find_by_username(username):
            return
        user = User(username=username, password_hash=self.passwords.hash(password), role=Role.ADMIN.value, joined=None)
        self.db.add(user)
        await self.db.commit()
        logger.info("Seeded admin user %r", username)
