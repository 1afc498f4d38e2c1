"""Per-user unread / updated tracking for forum threads.

A thread is UNREAD for a user who has no read marker on it and UPDATED when
it changed after the marker was last touched. Threads older than the
configured cutoff age are never flagged, and no markers are written for them.
Status is always recomputed from the store, never cached.
"""

import enum
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, AsyncIterator, Callable, Iterable, Optional, Protocol

from forum.core.config import settings
from forum.core.logging import logger
from forum.core.metrics import read_markers_written_total, thread_read_status_total
from forum.models.base import utcnow
from forum.models.category.policy import CategoryAccessPolicy, DefaultCategoryPolicy

if TYPE_CHECKING:
    from forum.models.thread.models import Thread
    from forum.models.thread_read.models import ThreadRead
    from forum.models.user.models import User


class ReadStatus(str, enum.Enum):
    UNREAD = "unread"
    UPDATED = "updated"
    NONE = "none"

    def __bool__(self) -> bool:
        return self is not ReadStatus.NONE


class ReadMarkerStore(Protocol):
    async def find(self, thread_id: int, user_id: int) -> Optional["ThreadRead"]: ...

    async def upsert(self, thread_id: int, user_id: int, timestamp: datetime) -> None: ...


def is_old(updated_at: datetime, now: datetime, cutoff: Optional[timedelta]) -> bool:
    """True when `cutoff` is unset or the thread was last updated before `now - cutoff`."""
    return not cutoff or updated_at < now - cutoff


_FROM_SETTINGS = object()


class ThreadReadTracker:
    """Computes and records read state for (thread, user) pairs.

    Attributes:
        store: Read-marker persistence, see ReadMarkerStore
        policy: Decides which categories a user may see
        clock: Returns the current aware datetime
        cutoff: Age past which threads are not tracked; None disables tracking
    """

    def __init__(
        self,
        store: ReadMarkerStore,
        policy: Optional[CategoryAccessPolicy] = None,
        clock: Callable[[], datetime] = utcnow,
        cutoff=_FROM_SETTINGS,
    ):
        self.store = store
        self.policy = policy or DefaultCategoryPolicy()
        self.clock = clock
        self._cutoff = cutoff

    @property
    def cutoff(self) -> Optional[timedelta]:
        if self._cutoff is _FROM_SETTINGS:
            return settings.THREAD_CUTOFF_AGE
        return self._cutoff

    def is_old(self, thread: "Thread", now: Optional[datetime] = None) -> bool:
        return is_old(thread.updated_at, now or self.clock(), self.cutoff)

    async def read_status(self, thread: "Thread", user: Optional["User"]) -> ReadStatus:
        """
        Read status of `thread` for `user`.

        Arguments:
            thread: Thread with updated_at loaded.
            user: Acting user, None for anonymous visitors.

        Returns:
            UNREAD, UPDATED or NONE. Anonymous users and old threads always get NONE.

        Raises:
            StoreUnavailable: The marker lookup failed.
        """
        if user is None or self.is_old(thread):
            status = ReadStatus.NONE
        else:
            marker = await self.store.find(thread.id, user.id)
            if marker is None:
                status = ReadStatus.UNREAD
            elif thread.updated_at > marker.updated_at:
                status = ReadStatus.UPDATED
            else:
                status = ReadStatus.NONE

        thread_read_status_total.labels(status=status.value).inc()
        return status

    async def mark_read(self, thread: "Thread", user: Optional["User"]) -> None:
        """
        Record that `user` has read `thread` now.

        Creates the marker on first read and touches it only when the thread
        changed since; otherwise nothing is written. Old threads and anonymous
        users are ignored.

        Raises:
            StoreUnavailable: The marker lookup or write failed.
        """
        if user is None:
            return

        now = self.clock()
        if self.is_old(thread, now):
            return

        marker = await self.store.find(thread.id, user.id)
        if marker is None:
            action = "created"
        elif thread.updated_at > marker.updated_at:
            action = "touched"
        else:
            return

        await self.store.upsert(thread.id, user.id, now)
        read_markers_written_total.labels(action=action).inc()
        logger.debug("thread_marked_read", thread_id=thread.id, user_id=user.id, action=action)

    async def recent_unread_for(
        self, user: Optional["User"], candidates: Iterable["Thread"]
    ) -> AsyncIterator["Thread"]:
        """
        Yield candidates that are unread or updated for `user` and whose category the user may view.

        Candidate order is preserved; callers pass threads already restricted to the
        cutoff window and sorted newest first.
        """
        for thread in candidates:
            if not self.policy.can_view(user, thread.category):
                continue
            if not await self.read_status(thread, user):
                continue
            yield thread

    async def new_for_reader(self, user: Optional["User"]) -> list["Thread"]:
        """Recent threads with new activity for `user`, newest first."""
        from forum.models.thread.dao import ThreadDAO

        cutoff = self.cutoff
        since = self.clock() - cutoff if cutoff else None
        candidates = await ThreadDAO.find_recent(since)
        threads = [thread async for thread in self.recent_unread_for(user, candidates)]
        logger.info(
            "new_threads_for_reader",
            user_id=user.id if user else None,
            candidates=len(candidates),
            unread=len(threads),
        )
        return threads
