from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from forum.models.base import Base, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from forum.models.thread.models import Thread
    from forum.models.user.models import User


class Post(TimestampMixin, SoftDeleteMixin, Base):
    id: Mapped[int] = mapped_column(primary_key=True)
    thread_id: Mapped[int] = mapped_column(ForeignKey("thread.id", ondelete="CASCADE"), index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("user.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    thread: Mapped["Thread"] = relationship(back_populates="posts")
    author: Mapped["User"] = relationship(back_populates="posts", lazy="joined")

    def __repr__(self):
        return f"<Post id={self.id} thread_id={self.thread_id} author_id={self.author_id}>"
