from typing import Literal

from pydantic import BaseModel


class TimelineEvent(BaseModel):
    id: int
    time: str  # display label, e.g. "1st Hour"
    title: str
    description: str
    icon: str  # Font Awesome classes
    side: Literal["left", "right"]
    order: int

    model_config = {"frozen": True}
