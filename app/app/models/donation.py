import enum

from sqlalchemy import (
    Column,
    UUID,
    BigInteger,
    ForeignKey,
    Numeric,
    String,
    Enum,
    CheckConstraint,
)

from app.db.base import Base
from app.models.mixins import TimestampedMixin, UUIDMixin


class DonationStatus(enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class Donation(UUIDMixin, TimestampedMixin, Base):
    """Модель пожертвования"""

    __tablename__ = "donations"

    user_telegram_id = Column(
        BigInteger,
        ForeignKey("users.user_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    goal_id = Column(
        UUID(as_uuid=True),
        ForeignKey("donation_goals.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="RUB")
    provider_payment_id = Column(String(255), nullable=False, unique=True)
    status = Column(
        Enum(DonationStatus),
        nullable=False,
        default=DonationStatus.PENDING,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_donation_amount_positive"),
        {"extend_existing": True},
    )

    def __repr__(self) -> str:
        return f"Пожертвование: {self.provider_payment_id} | {self.amount} {self.currency}"
