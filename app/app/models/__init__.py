from app.models.telegram_user import TelegramUser
from app.models.donation_goal import DonationGoal
from app.models.donation import Donation, DonationStatus

__all__ = ["TelegramUser", "DonationGoal", "Donation", "DonationStatus"]
