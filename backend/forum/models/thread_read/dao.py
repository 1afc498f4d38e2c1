"""SQL-backed read-marker store."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from forum.core.exceptions import StoreUnavailable
from forum.core.logging import logger
from forum.core.metrics import read_marker_store_errors_total
from forum.models.thread_read.models import ThreadRead
from forum.services import database

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlReadMarkerStore:
    """Read markers in the `thread_read` table, one transaction per call."""

    async def find(self, thread_id: int, user_id: int) -> ThreadRead | None:
        try:
            async with database.async_session_maker() as session:
                result = await session.execute(
                    select(ThreadRead).where(ThreadRead.thread_id == thread_id, ThreadRead.user_id == user_id)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            read_marker_store_errors_total.labels(operation="find").inc()
            logger.error("read_marker_find_failed", thread_id=thread_id, user_id=user_id, error=str(e))
            raise StoreUnavailable("find", thread_id, user_id) from e

    async def upsert(self, thread_id: int, user_id: int, timestamp: datetime) -> None:
        """Insert the marker or move its timestamp forward, relying on the (thread_id, user_id) key.

        A write carrying an older timestamp than the stored one leaves the marker as it is.
        """
        dialect = database.engine.dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            read_marker_store_errors_total.labels(operation="upsert").inc()
            logger.error("read_marker_upsert_unsupported", dialect=dialect)
            raise StoreUnavailable("upsert", thread_id, user_id)

        stmt = insert(ThreadRead).values(
            thread_id=thread_id, user_id=user_id, created_at=timestamp, updated_at=timestamp
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ThreadRead.thread_id, ThreadRead.user_id],
            set_={"updated_at": stmt.excluded.updated_at},
            where=ThreadRead.updated_at < stmt.excluded.updated_at,
        )
        try:
            async with database.async_session_maker() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            read_marker_store_errors_total.labels(operation="upsert").inc()
            logger.error("read_marker_upsert_failed", thread_id=thread_id, user_id=user_id, error=str(e))
            raise StoreUnavailable("upsert", thread_id, user_id) from e
