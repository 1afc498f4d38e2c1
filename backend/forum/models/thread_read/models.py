"""Per-user read markers for threads."""

from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from forum.models.base import Base, UTCDateTime, utcnow


class ThreadRead(Base):
    """Last time a user read a thread.

    The composite primary key keeps one marker per (thread, user) pair;
    `updated_at` is the marker timestamp compared against the thread's.
    """

    __tablename__ = "thread_read"

    thread_id: Mapped[int] = mapped_column(ForeignKey("thread.id", ondelete="CASCADE"), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)

    def __repr__(self):
        return f"<ThreadRead thread_id={self.thread_id} user_id={self.user_id} updated_at={self.updated_at}>"
