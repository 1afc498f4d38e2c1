from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from forum.models.base import Base

if TYPE_CHECKING:
    from forum.models.thread.models import Thread


class Category(Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    private: Mapped[bool] = mapped_column(Boolean, default=False)

    threads: Mapped[List["Thread"]] = relationship(back_populates="category")

    def __repr__(self):
        return f"<Category id={self.id} title={self.title!r} private={self.private}>"
