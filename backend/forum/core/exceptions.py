"""Errors raised by the forum package."""


class ForumError(Exception):
    """Base class for forum errors."""


class StoreUnavailable(ForumError):
    """A read-marker lookup or write failed at the storage layer.

    Callers rendering listings should treat this as "status unknown" rather
    than as a thread with no unread activity.
    """

    def __init__(self, operation: str, thread_id: int | None = None, user_id: int | None = None):
        self.operation = operation
        self.thread_id = thread_id
        self.user_id = user_id
        super().__init__(f"read marker store {operation} failed (thread={thread_id}, user={user_id})")
