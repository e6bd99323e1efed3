from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.viewer_counter import ViewerCount

_ROW_ID = 1


class ViewerCounter:
    """Process-wide page view counter stored as a single row."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def seed(self, start: int) -> None:
        row = await self.db.get(ViewerCount, _ROW_ID)
        if not row:
            self.db.add(ViewerCount(id=_ROW_ID, count=start))
            await self.db.commit()

    async def current(self) -> int:
        row = await self.db.get(ViewerCount, _ROW_ID, populate_existing=True)
        return row.count if row else 0

    async def increment(self) -> int:
        await self.db.execute(
            update(ViewerCount).where(ViewerCount.id == _ROW_ID).values(count=ViewerCount.count + 1)
        )
        await self.db.commit()
        return await self.current()
