from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class ViewerCount(Base):
    __tablename__ = "viewer_count"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
