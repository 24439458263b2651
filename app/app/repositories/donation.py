from sqlalchemy import select, update

from .base import RepositoryBase
from app.models.donation import Donation, DonationStatus


class RepositoryDonation(RepositoryBase[Donation]):
    """Репозиторий пожертвований"""

    def create_donation(self, obj_in: dict) -> Donation:
        """Вставка пожертвования. Повтор provider_payment_id падает на уникальном ограничении"""
        return self.create(obj_in=obj_in)

    def get_by_provider_payment_id(
            self,
            provider_payment_id: str,
            for_update: bool = False,
    ) -> Donation | None:
        statement = select(Donation).filter_by(provider_payment_id=provider_payment_id)
        if for_update:
            statement = statement.with_for_update()

        return self._session.execute(
            statement.execution_options(populate_existing=True)
        ).scalars().first()

    def transition_status(
            self,
            provider_payment_id: str,
            from_status: DonationStatus,
            to_status: DonationStatus,
    ) -> bool:
        """
        Условная смена статуса.
        Возвращает True только тому вызову, который действительно сменил статус.
        """
        statement = (
            update(Donation)
            .where(
                (Donation.provider_payment_id == provider_payment_id)
                & (Donation.status == from_status)
            )
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )

        return self._session.execute(statement).rowcount == 1
