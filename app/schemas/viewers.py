from pydantic import BaseModel


class ViewerCountRead(BaseModel):
    count: int
