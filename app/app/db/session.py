from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, scoped_session


class SyncSession:
    """Движок БД и фабрика сессий, привязанных к потоку"""

    def __init__(self, db_url: str, echo: bool = False) -> None:
        connect_args = {}
        if db_url.startswith("sqlite"):
            connect_args = {"check_same_thread": False, "timeout": 30}

        self._engine = create_engine(
            db_url,
            echo=echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self._session_factory = scoped_session(
            sessionmaker(
                bind=self._engine,
                autoflush=False,
                expire_on_commit=False,
            )
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def session_factory(self) -> scoped_session:
        return self._session_factory

    def remove_session(self) -> None:
        self._session_factory.remove()
