from decimal import Decimal

from sqlalchemy import Column, String, Text, Numeric, Boolean, Index, CheckConstraint

from app.db.base import Base
from app.models.mixins import TimestampedMixin, UUIDMixin


class DonationGoal(UUIDMixin, TimestampedMixin, Base):
    """Модель цели сбора"""

    __tablename__ = "donation_goals"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    target_amount = Column(Numeric(12, 2), nullable=False)
    current_amount = Column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0"),
        server_default="0",
    )
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("target_amount > 0", name="chk_goal_target_positive"),
        Index(
            "idx_donation_goals_active",
            "is_active",
            unique=True,
            postgresql_where=is_active.is_(True),
            sqlite_where=is_active.is_(True),
        ),
        {"extend_existing": True},
    )

    def __repr__(self) -> str:
        return f"Цель: {self.title} ({self.current_amount}/{self.target_amount})"
