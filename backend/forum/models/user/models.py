from typing import TYPE_CHECKING, List
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from forum.models.base import Base

if TYPE_CHECKING:
    from forum.models.thread.models import Thread
    from forum.models.post.models import Post


class User(Base):

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String, unique=True, index=True)

    threads: Mapped[List["Thread"]] = relationship("Thread", back_populates="author")
    posts: Mapped[List["Post"]] = relationship("Post", back_populates="author")

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
