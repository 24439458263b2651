from decimal import Decimal

from loguru import logger

from app.core.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    UnknownPaymentError,
)
from app.db.transaction import atomic
from app.models.donation import DonationStatus
from app.repositories.donation import RepositoryDonation
from app.repositories.donation_goal import RepositoryDonationGoal
from app.schemas.donation import DonationEntity
from app.schemas.donation_goal import DonationGoalEntity


class DonationService:

    def __init__(
        self,
        repository_donation: RepositoryDonation,
        repository_donation_goal: RepositoryDonationGoal,
    ) -> None:
        self._repository_donation = repository_donation
        self._repository_donation_goal = repository_donation_goal

    def _ensure_status(self, provider_payment_id: str, expected: DonationStatus) -> None:
        """Статус был сменен параллельным вызовом: допустим только тот же итог"""
        donation = self._repository_donation.get_by_provider_payment_id(provider_payment_id)
        if donation.status != expected:
            raise InvalidTransitionError(
                f"Платеж {provider_payment_id} уже в статусе {donation.status.value}"
            )

    async def register_donation(
        self,
        user_telegram_id: int,
        amount: Decimal,
        currency: str,
        provider_payment_id: str,
    ) -> DonationEntity:
        """
        Создание пожертвования в статусе PENDING в момент выставления счета.
        Пожертвование привязывается к активной цели и больше не меняет ее.
        """
        if amount <= 0:
            raise InvalidInputError("Сумма пожертвования должна быть больше нуля")

        with atomic(self._repository_donation.session):
            goal = self._repository_donation_goal.get_active_goal()
            if not goal:
                raise NotFoundError("Нет активной цели для пожертвований")

            donation = DonationEntity(
                user_telegram_id=user_telegram_id,
                goal_id=goal.id,
                amount=amount,
                currency=currency,
                provider_payment_id=provider_payment_id,
            )
            donation_obj = self._repository_donation.create_donation(
                obj_in=donation.model_dump()
            )
            result = DonationEntity.model_validate(donation_obj)

        logger.info(
            f"Пожертвование {provider_payment_id} от {user_telegram_id} "
            f"на {amount} {currency} ожидает оплаты"
        )

        return result

    async def is_payable(self, provider_payment_id: str) -> bool:
        """Можно ли еще оплатить пожертвование (ответ на pre-checkout)"""
        with atomic(self._repository_donation.session):
            donation = self._repository_donation.get_by_provider_payment_id(
                provider_payment_id
            )
            return bool(donation and donation.status == DonationStatus.PENDING)

    async def confirm_donation(self, provider_payment_id: str) -> DonationGoalEntity | None:
        """
        Подтверждение оплаты.

        Смена статуса PENDING -> CONFIRMED и увеличение собранной суммы цели
        фиксируются одной транзакцией. Повторное подтверждение того же платежа
        сумму не меняет. Возвращает актуальное состояние цели пожертвования.
        """
        with atomic(self._repository_donation.session):
            donation = self._repository_donation.get_by_provider_payment_id(
                provider_payment_id, for_update=True
            )
            if not donation:
                raise UnknownPaymentError(provider_payment_id)

            if donation.status == DonationStatus.FAILED:
                raise InvalidTransitionError(
                    f"Платеж {provider_payment_id} уже отклонен"
                )

            is_transitioned = self._repository_donation.transition_status(
                provider_payment_id,
                from_status=DonationStatus.PENDING,
                to_status=DonationStatus.CONFIRMED,
            )
            if not is_transitioned:
                self._ensure_status(provider_payment_id, DonationStatus.CONFIRMED)
            if is_transitioned and donation.goal_id is not None:
                self._repository_donation_goal.increment_current_amount(
                    goal_id=donation.goal_id, delta=donation.amount
                )

            goal = None
            if donation.goal_id is not None:
                goal = self._repository_donation_goal.get_fresh(donation.goal_id)
            goal_entity = DonationGoalEntity.model_validate(goal) if goal else None

        if is_transitioned:
            logger.info(
                f"Пожертвование {provider_payment_id} подтверждено: "
                f"{donation.amount} {donation.currency} на цель {donation.goal_id}"
            )
        else:
            logger.info(f"Повторное подтверждение {provider_payment_id} пропущено")

        return goal_entity

    async def fail_donation(self, provider_payment_id: str) -> bool:
        """
        Отклонение платежа: PENDING -> FAILED.
        Возвращает True, если статус сменился, и False, если платеж уже отклонен.
        """
        with atomic(self._repository_donation.session):
            donation = self._repository_donation.get_by_provider_payment_id(
                provider_payment_id, for_update=True
            )
            if not donation:
                raise UnknownPaymentError(provider_payment_id)

            if donation.status == DonationStatus.CONFIRMED:
                raise InvalidTransitionError(
                    f"Платеж {provider_payment_id} уже подтвержден"
                )

            is_transitioned = self._repository_donation.transition_status(
                provider_payment_id,
                from_status=DonationStatus.PENDING,
                to_status=DonationStatus.FAILED,
            )
            if not is_transitioned:
                self._ensure_status(provider_payment_id, DonationStatus.FAILED)

        if is_transitioned:
            logger.info(f"Пожертвование {provider_payment_id} отклонено")

        return is_transitioned
