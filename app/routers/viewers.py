from fastapi import APIRouter, Depends

from app.dependencies import get_viewer_counter
from app.schemas.viewers import ViewerCountRead
from app.services.viewers import ViewerCounter

router = APIRouter()


@router.get("", response_model=ViewerCountRead)
async def get_viewers(counter: ViewerCounter = Depends(get_viewer_counter)):
    return ViewerCountRead(count=await counter.current())


@router.post("", response_model=ViewerCountRead)
async def add_viewer(counter: ViewerCounter = Depends(get_viewer_counter)):
    return ViewerCountRead(count=await counter.increment())
