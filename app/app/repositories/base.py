from typing import Any, Generic, Type, TypeVar

from sqlalchemy import select, exists
from sqlalchemy.orm import Session, scoped_session

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class RepositoryBase(Generic[ModelType]):
    """Базовый репозиторий"""

    def __init__(self, model: Type[ModelType], session: Session | scoped_session) -> None:
        self._model = model
        self._session = session

    @property
    def session(self) -> Session | scoped_session:
        return self._session

    def get(self, *args, **kwargs) -> ModelType | None:
        statement = select(self._model).filter(*args).filter_by(**kwargs)
        return self._session.execute(statement).scalars().first()

    def list(self, *args, **kwargs) -> list[ModelType]:
        statement = select(self._model).filter(*args).filter_by(**kwargs)
        return list(self._session.execute(statement).scalars().all())

    def exists(self, *args, **kwargs) -> bool:
        statement = select(
            exists(select(self._model).filter(*args).filter_by(**kwargs))
        )
        return bool(self._session.execute(statement).scalar())

    def create(self, obj_in: dict[str, Any]) -> ModelType:
        db_obj = self._model(**obj_in)
        self._session.add(db_obj)
        self._session.flush()
        return db_obj
