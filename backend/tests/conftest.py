from datetime import datetime, timedelta, UTC

import pytest

from forum.models.category.dao import CategoryDAO
from forum.models.thread.models import Thread
from forum.models.user.dao import UsersDAO
from forum.services import database

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
async def db(tmp_path):
    engine = database.configure(f"sqlite+aiosqlite:///{tmp_path / 'forum.db'}")
    await database.init_models()
    yield engine
    await engine.dispose()


@pytest.fixture
async def category(db):
    return await CategoryDAO.add(title="General Discussion")


@pytest.fixture
async def private_category(db):
    return await CategoryDAO.add(title="Staff Room", private=True)


@pytest.fixture
async def user(db):
    return await UsersDAO.add(name="Reader", email="reader@example.com")


@pytest.fixture
async def author(db):
    return await UsersDAO.add(name="Author", email="author@example.com")


@pytest.fixture
def make_thread(category, author):
    from forum.models.thread.dao import ThreadDAO

    async def _make(title="Hello World", at=T0, **values) -> Thread:
        values.setdefault("category_id", category.id)
        thread = await ThreadDAO.add(
            title=title, author_id=author.id, created_at=at, updated_at=at, **values
        )
        return await ThreadDAO.find_one_or_none_by_id(thread.id)

    return _make
