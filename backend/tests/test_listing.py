from datetime import timedelta

from forum.core.exceptions import StoreUnavailable
from forum.models.post.dao import PostDAO
from forum.models.thread_read.dao import SqlReadMarkerStore
from forum.services.listing import thread_listing
from forum.services.read_tracker import ReadStatus, ThreadReadTracker
from tests.conftest import T0, FakeClock


class UnavailableStore:
    async def find(self, thread_id, user_id):
        raise StoreUnavailable("find", thread_id, user_id)

    async def upsert(self, thread_id, user_id, timestamp):
        raise StoreUnavailable("upsert", thread_id, user_id)


def tracker_for(store):
    return ThreadReadTracker(store, clock=FakeClock(T0 + timedelta(hours=1)), cutoff=timedelta(days=14))


async def test_listing_rows(make_thread, user, author):
    tracker = tracker_for(SqlReadMarkerStore())
    unread = await make_thread(title="Unread")
    read = await make_thread(title="Read")
    await PostDAO.add_reply(read.id, author.id, "opening", at=T0)
    await PostDAO.add_reply(read.id, author.id, "reply", at=T0)
    await tracker.mark_read(read, user)

    rows = await thread_listing(tracker, [unread, read], user)

    assert [row.read_status for row in rows] == [ReadStatus.UNREAD, ReadStatus.NONE]
    assert rows[1].read_status is not None
    assert rows[1].reply_count == 1
    assert rows[1].last_post_url.startswith(read.route + "?page=1#post-")
    assert rows[0].last_post_url is None


async def test_listing_survives_store_outage(make_thread, user):
    thread = await make_thread()

    rows = await thread_listing(tracker_for(UnavailableStore()), [thread], user)

    assert rows[0].read_status is None
    assert rows[0].title == thread.title


async def test_new_for_reader(make_thread, private_category, user):
    tracker = ThreadReadTracker(SqlReadMarkerStore(), clock=FakeClock(T0), cutoff=timedelta(days=14))
    stale = await make_thread(title="Stale", at=T0 - timedelta(days=20))
    first = await make_thread(title="First", at=T0 - timedelta(days=2))
    second = await make_thread(title="Second", at=T0 - timedelta(days=1))
    staff = await make_thread(title="Staff", at=T0 - timedelta(hours=1), category_id=private_category.id)
    await tracker.mark_read(first, user)

    found = await tracker.new_for_reader(user)
    assert [t.id for t in found] == [staff.id, second.id]
    assert stale.id not in [t.id for t in found]

    assert await tracker.new_for_reader(None) == []


async def test_outage_is_distinct_from_nothing_new(make_thread, user):
    thread = await make_thread()
    await tracker_for(SqlReadMarkerStore()).mark_read(thread, user)

    healthy = await thread_listing(tracker_for(SqlReadMarkerStore()), [thread], user)
    outage = await thread_listing(tracker_for(UnavailableStore()), [thread], user)

    assert healthy[0].read_status is ReadStatus.NONE
    assert outage[0].read_status is None
    assert healthy[0].read_status != outage[0].read_status
