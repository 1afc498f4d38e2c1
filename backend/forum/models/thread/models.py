"""Forum thread model and its derived display attributes."""

from typing import TYPE_CHECKING, Any, List

from slugify import slugify
from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum.core.config import settings
from forum.core.routes import build_route
from forum.models.base import Base, SoftDeleteMixin, TimestampMixin, utcnow

if TYPE_CHECKING:
    from forum.models.category.models import Category
    from forum.models.post.models import Post
    from forum.models.user.models import User


class Thread(TimestampMixin, SoftDeleteMixin, Base):
    """A discussion topic inside a category.

    `updated_at` is the last-update time used for read tracking; it moves on
    edits and whenever a reply is posted.
    """

    id: Mapped[int] = mapped_column(primary_key=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("category.id"), nullable=False, index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("user.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    locked: Mapped[bool] = mapped_column(Boolean, default=False)
    pinned: Mapped[bool] = mapped_column(Boolean, default=False)

    category: Mapped["Category"] = relationship(back_populates="threads", lazy="joined")
    author: Mapped["User"] = relationship(back_populates="threads", lazy="joined")
    posts: Mapped[List["Post"]] = relationship(
        back_populates="thread", order_by="Post.created_at", cascade="all, delete-orphan"
    )
    readers: Mapped[List["User"]] = relationship(secondary="thread_read", viewonly=True)

    def __repr__(self):
        return f"<Thread id={self.id} category_id={self.category_id} title={self.title!r}>"

    # Routes

    @property
    def route_components(self) -> dict[str, Any]:
        return {
            "category": self.category.id,
            "categorySlug": slugify(self.category.title),
            "thread": self.id,
            "threadSlug": slugify(self.title),
        }

    def get_route(self, name: str, params: dict[str, Any] | None = None) -> str:
        return build_route(name, {**self.route_components, **(params or {})})

    @property
    def route(self) -> str:
        return self.get_route("forum.thread.show")

    @property
    def reply_route(self) -> str:
        return self.get_route("forum.post.create")

    @property
    def update_route(self) -> str:
        return build_route("forum.api.v1.thread.update", {"thread": self.id})

    @property
    def delete_route(self) -> str:
        return build_route("forum.api.v1.thread.destroy", {"thread": self.id})

    @property
    def restore_route(self) -> str:
        return build_route("forum.api.v1.thread.restore", {"thread": self.id})

    @property
    def force_delete_route(self) -> str:
        return build_route("forum.api.v1.thread.destroy", {"thread": self.id, "force": 1})

    def last_post_url_for(self, last_page: int, last_post_id: int) -> str:
        return f"{self.route}?page={last_page}#post-{last_post_id}"

    # Age

    @property
    def old(self) -> bool:
        """Past the configured read-tracking cutoff; always True when tracking is disabled."""
        from forum.services.read_tracker import is_old

        return is_old(self.updated_at, utcnow(), settings.THREAD_CUTOFF_AGE)
