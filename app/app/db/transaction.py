from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from app.core.exceptions import DuplicateKeyError, InfrastructureFailureError

UNIQUE_VIOLATION_PGCODE = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    if getattr(error.orig, "pgcode", None) == UNIQUE_VIOLATION_PGCODE:
        return True
    return "UNIQUE constraint failed" in str(error.orig)


@contextmanager
def atomic(session: Session | scoped_session) -> Iterator[Session | scoped_session]:
    """
    Единица работы с БД.
    Все изменения внутри блока фиксируются одним commit,
    при любой ошибке транзакция откатывается целиком.
    Ошибки SQLAlchemy переводятся в DuplicateKeyError / InfrastructureFailureError.
    """
    try:
        yield session
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if is_unique_violation(e):
            raise DuplicateKeyError(str(e.orig)) from e
        raise InfrastructureFailureError(str(e.orig)) from e
    except SQLAlchemyError as e:
        session.rollback()
        raise InfrastructureFailureError(str(e)) from e
    except Exception:
        session.rollback()
        raise
