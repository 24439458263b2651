from decimal import Decimal

from loguru import logger

from app.core.exceptions import InvalidInputError
from app.db.transaction import atomic
from app.repositories.donation_goal import RepositoryDonationGoal
from app.schemas.donation_goal import DonationGoalEntity, GoalStats
from app.services.goal_creation_state import ConversationStateStore


class GoalService:

    def __init__(
        self,
        repository_donation_goal: RepositoryDonationGoal,
        goal_creation_state_store: ConversationStateStore,
        max_target_amount: Decimal | None = None,
    ) -> None:
        self._repository_donation_goal = repository_donation_goal
        self._goal_creation_state_store = goal_creation_state_store
        self._max_target_amount = max_target_amount

    async def get_active_goal(self) -> DonationGoalEntity | None:
        with atomic(self._repository_donation_goal.session):
            goal = self._repository_donation_goal.get_active_goal()
            return DonationGoalEntity.model_validate(goal) if goal else None

    async def count_donations_for_active_goal(self) -> int:
        with atomic(self._repository_donation_goal.session):
            return self._repository_donation_goal.count_donations_for_active_goal()

    async def count_distinct_donors_for_active_goal(self) -> int:
        with atomic(self._repository_donation_goal.session):
            return self._repository_donation_goal.count_distinct_donors_for_active_goal()

    async def get_goal_stats(self) -> GoalStats:
        """Активная цель и агрегаты, прочитанные в одной транзакции"""
        with atomic(self._repository_donation_goal.session):
            goal = self._repository_donation_goal.get_active_goal()
            if not goal:
                return GoalStats()

            return GoalStats(
                goal=DonationGoalEntity.model_validate(goal),
                donations_count=self._repository_donation_goal.count_donations_for_active_goal(),
                donors_count=self._repository_donation_goal.count_distinct_donors_for_active_goal(),
            )

    async def create_goal(
        self,
        admin_id: int,
        title: str,
        description: str | None,
        target_amount: Decimal,
    ) -> DonationGoalEntity:
        """
        Создание новой активной цели.
        Предыдущая активная цель деактивируется в той же транзакции.
        Состояние мастера очищается только после успешного commit.
        """
        if target_amount is None or target_amount <= 0:
            raise InvalidInputError("Целевая сумма должна быть больше нуля")
        if self._max_target_amount is not None and target_amount > self._max_target_amount:
            raise InvalidInputError(
                f"Целевая сумма не может превышать {self._max_target_amount}"
            )
        if not title:
            raise InvalidInputError("Название цели не может быть пустым")

        with atomic(self._repository_donation_goal.session):
            goal = self._repository_donation_goal.create_active_goal(
                obj_in={
                    "title": title,
                    "description": description,
                    "target_amount": target_amount,
                }
            )
            goal_entity = DonationGoalEntity.model_validate(goal)

        self._goal_creation_state_store.cancel_goal_creation(admin_id)
        logger.info(
            f"Администратор {admin_id} создал цель {goal_entity.id}: "
            f"{goal_entity.title}, {goal_entity.target_amount}"
        )

        return goal_entity

    async def create_goal_from_state(self, admin_id: int) -> DonationGoalEntity:
        """Сохранение цели из заполненного мастера"""
        state = self._goal_creation_state_store.get_state(admin_id)
        if state is None or not state.is_complete:
            raise InvalidInputError("Мастер создания цели не заполнен")

        return await self.create_goal(
            admin_id=admin_id,
            title=state.title,
            description=state.description,
            target_amount=state.target_amount,
        )
