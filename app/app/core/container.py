from dependency_injector import containers, providers

from app.core.config import Settings
from app.db.session import SyncSession
from app.models.telegram_user import TelegramUser
from app.models.donation_goal import DonationGoal
from app.models.donation import Donation
from app.repositories.telegram_user import RepositoryTelegramUser
from app.repositories.donation_goal import RepositoryDonationGoal
from app.repositories.donation import RepositoryDonation
from app.services.goal_creation_state import GoalCreationStateStore
from app.services.telegram_user_service import TelegramUserService
from app.services.goal_service import GoalService
from app.services.donation_service import DonationService


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
            "app.handlers.start",
            "app.handlers.donate",
            "app.handlers.admin",
        ]
    )

    config = providers.Singleton(Settings)
    db = providers.Singleton(
        SyncSession,
        db_url=config.provided.postgres_url,
        echo=config.provided.debug,
    )
    session = db.provided.session_factory

    # region repository
    repository_telegram_user = providers.Singleton(
        RepositoryTelegramUser, model=TelegramUser, session=session
    )
    repository_donation_goal = providers.Singleton(
        RepositoryDonationGoal, model=DonationGoal, session=session
    )
    repository_donation = providers.Singleton(
        RepositoryDonation, model=Donation, session=session
    )
    # endregion

    # region services
    goal_creation_state_store = providers.Singleton(GoalCreationStateStore)
    telegram_user_service = providers.Singleton(
        TelegramUserService, repository_telegram_user=repository_telegram_user
    )
    goal_service = providers.Singleton(
        GoalService,
        repository_donation_goal=repository_donation_goal,
        goal_creation_state_store=goal_creation_state_store,
        max_target_amount=config.provided.max_goal_target_amount,
    )
    donation_service = providers.Singleton(
        DonationService,
        repository_donation=repository_donation,
        repository_donation_goal=repository_donation_goal,
    )
    # endregion
