from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, update as sqlalchemy_update
from forum.core.logging import logger
from forum.services import database


class BaseDao:
    model = None

    @classmethod
    async def find_one_or_none_by_id(cls, id: int):
        """
        Asynchronously finds and returns one instance of the model by its identifier or None.

        Arguments:
            id: Record identifier.

        Returns:
            Model instance or None if nothing is found.
        """
        async with database.async_session_maker() as session:
            return await session.get(cls.model, id)

    @classmethod
    async def find_all(cls, **filter_by):
        """
        Asynchronously finds and returns all instances of the model that match the specified criteria.

        Arguments:
            **filter_by: Criteria for filtering in the form of named parameters.

        Returns:
            List of model instances.
        """
        async with database.async_session_maker() as session:
            query = select(cls.model).filter_by(**filter_by)
            result = await session.execute(query)
            return result.unique().scalars().all()

    @classmethod
    async def add(cls, **values):
        """
        Asynchronously creates a new model instance with the specified values.

        Arguments:
            **values: Named parameters for creating a new model instance.

        Returns:
            Created model instance.
        """
        async with database.async_session_maker() as session:
            new_instance = cls.model(**values)
            session.add(new_instance)
            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("dao_add_failed", model=cls.model.__name__, error=str(e))
                raise
            await session.refresh(new_instance)
            return new_instance

    @classmethod
    async def update(cls, filter_by, **values):
        """
        Asynchronously updates model instances that match the filtering criteria specified in filter_by
        with new values specified in values.

        Arguments:
            filter_by: Criteria for filtering in the form of named parameters.
            **values: Named parameters for updating model instance values.

        Returns:
            Number of updated model instances.
        """
        async with database.async_session_maker() as session:
            query = (
                sqlalchemy_update(cls.model)
                .where(*[getattr(cls.model, k) == v for k, v in filter_by.items()])
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            try:
                result = await session.execute(query)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("dao_update_failed", model=cls.model.__name__, error=str(e))
                raise
            return result.rowcount

