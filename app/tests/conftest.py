"""
Pytest configuration and fixtures.
"""
import os
from decimal import Decimal

import pytest
from sqlalchemy import event

os.environ.setdefault("BOT_TOKEN", "123456789:test-token")

from app import models  # noqa: F401
from app.db.base import Base
from app.db.session import SyncSession
from app.models.donation import Donation
from app.models.donation_goal import DonationGoal
from app.models.telegram_user import TelegramUser
from app.repositories.donation import RepositoryDonation
from app.repositories.donation_goal import RepositoryDonationGoal
from app.repositories.telegram_user import RepositoryTelegramUser
from app.services.donation_service import DonationService
from app.services.goal_creation_state import GoalCreationStateStore
from app.services.goal_service import GoalService
from app.services.telegram_user_service import TelegramUserService


@pytest.fixture
def db(tmp_path):
    """File-backed SQLite; every transaction takes the write lock up front."""
    sync_session = SyncSession(db_url=f"sqlite:///{tmp_path / 'test.db'}")
    engine = sync_session.engine

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    Base.metadata.create_all(engine)

    yield sync_session

    sync_session.remove_session()
    engine.dispose()


@pytest.fixture
def repository_telegram_user(db) -> RepositoryTelegramUser:
    return RepositoryTelegramUser(model=TelegramUser, session=db.session_factory)


@pytest.fixture
def repository_donation_goal(db) -> RepositoryDonationGoal:
    return RepositoryDonationGoal(model=DonationGoal, session=db.session_factory)


@pytest.fixture
def repository_donation(db) -> RepositoryDonation:
    return RepositoryDonation(model=Donation, session=db.session_factory)


@pytest.fixture
def state_store() -> GoalCreationStateStore:
    return GoalCreationStateStore()


@pytest.fixture
def telegram_user_service(repository_telegram_user) -> TelegramUserService:
    return TelegramUserService(repository_telegram_user=repository_telegram_user)


@pytest.fixture
def goal_service(repository_donation_goal, state_store) -> GoalService:
    return GoalService(
        repository_donation_goal=repository_donation_goal,
        goal_creation_state_store=state_store,
        max_target_amount=Decimal("99999999"),
    )


@pytest.fixture
def donation_service(repository_donation, repository_donation_goal) -> DonationService:
    return DonationService(
        repository_donation=repository_donation,
        repository_donation_goal=repository_donation_goal,
    )
