"""SqlReadMarkerStore and the tracker running against SQLite."""

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from forum.core.exceptions import StoreUnavailable
from forum.models.post.dao import PostDAO
from forum.models.thread_read.dao import SqlReadMarkerStore
from forum.models.thread_read.models import ThreadRead
from forum.services import database
from forum.services.read_tracker import ReadStatus, ThreadReadTracker
from tests.conftest import T0, FakeClock


async def count_markers() -> int:
    async with database.async_session_maker() as session:
        return await session.scalar(select(func.count()).select_from(ThreadRead))


async def test_find_missing_marker(db, make_thread, user):
    thread = await make_thread()

    assert await SqlReadMarkerStore().find(thread.id, user.id) is None


async def test_upsert_inserts_then_updates(db, make_thread, user):
    store = SqlReadMarkerStore()
    thread = await make_thread()

    await store.upsert(thread.id, user.id, T0)
    await store.upsert(thread.id, user.id, T0 + timedelta(minutes=5))

    marker = await store.find(thread.id, user.id)
    assert marker.updated_at == T0 + timedelta(minutes=5)
    assert marker.created_at == T0
    assert await count_markers() == 1


async def test_concurrent_mark_read_keeps_one_marker(db, make_thread, user):
    thread = await make_thread()
    tracker = ThreadReadTracker(SqlReadMarkerStore(), clock=FakeClock(T0 + timedelta(hours=1)), cutoff=timedelta(days=14))

    await asyncio.gather(*(tracker.mark_read(thread, user) for _ in range(5)))

    assert await count_markers() == 1
    assert await tracker.read_status(thread, user) is ReadStatus.NONE


async def test_reply_flags_thread_updated(db, make_thread, user, author):
    clock = FakeClock(T0 + timedelta(hours=1))
    tracker = ThreadReadTracker(SqlReadMarkerStore(), clock=clock, cutoff=timedelta(days=14))
    thread = await make_thread()

    assert await tracker.read_status(thread, user) is ReadStatus.UNREAD
    await tracker.mark_read(thread, user)
    assert await tracker.read_status(thread, user) is ReadStatus.NONE

    await PostDAO.add_reply(thread.id, author.id, "First reply", at=clock.advance(minutes=10))
    thread = await thread_from_db(thread.id)
    assert await tracker.read_status(thread, user) is ReadStatus.UPDATED

    clock.advance(minutes=1)
    await tracker.mark_read(thread, user)
    marker = await SqlReadMarkerStore().find(thread.id, user.id)
    assert marker.updated_at == clock.now
    assert await tracker.read_status(thread, user) is ReadStatus.NONE


async def test_store_errors_are_wrapped(db, make_thread, user):
    thread = await make_thread()
    async with db.begin() as conn:
        await conn.run_sync(ThreadRead.__table__.drop)

    store = SqlReadMarkerStore()
    with pytest.raises(StoreUnavailable) as exc_info:
        await store.find(thread.id, user.id)
    assert isinstance(exc_info.value.__cause__, OperationalError)

    with pytest.raises(StoreUnavailable) as exc_info:
        await store.upsert(thread.id, user.id, T0)
    assert exc_info.value.operation == "upsert"


async def thread_from_db(thread_id):
    from forum.models.thread.dao import ThreadDAO

    return await ThreadDAO.find_one_or_none_by_id(thread_id)


async def test_upsert_never_moves_marker_backwards(db, make_thread, user):
    store = SqlReadMarkerStore()
    thread = await make_thread()

    await store.upsert(thread.id, user.id, T0 + timedelta(minutes=5))
    await store.upsert(thread.id, user.id, T0)

    marker = await store.find(thread.id, user.id)
    assert marker.updated_at == T0 + timedelta(minutes=5)
    assert await count_markers() == 1


async def test_upsert_on_unsupported_dialect(db, make_thread, user, monkeypatch):
    from forum.models.thread_read import dao

    monkeypatch.setattr(dao, "_INSERTS", {})
    thread = await make_thread()

    with pytest.raises(StoreUnavailable) as exc_info:
        await SqlReadMarkerStore().upsert(thread.id, user.id, T0)
    assert exc_info.value.operation == "upsert"
    assert await count_markers() == 0


async def test_readers_lists_marker_holders(db, make_thread, user, author):
    from forum.models.thread.dao import ThreadDAO

    store = SqlReadMarkerStore()
    thread = await make_thread()
    assert await ThreadDAO.readers(thread.id) == []

    await store.upsert(thread.id, author.id, T0)
    await store.upsert(thread.id, user.id, T0)

    readers = await ThreadDAO.readers(thread.id)
    assert sorted(u.id for u in readers) == sorted([user.id, author.id])
    assert await ThreadDAO.readers(thread.id + 100) == []
