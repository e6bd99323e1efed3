from fastapi import APIRouter, Depends

from app.dependencies import get_timeline
from app.schemas.timeline import TimelineEvent
from app.services.timeline import TimelineStore

router = APIRouter()


@router.get("", response_model=list[TimelineEvent])
async def list_timeline(
    search: str | None = None,
    sort: str = "default",
    timeline: TimelineStore = Depends(get_timeline),
):
    return timeline.query(search, sort)
