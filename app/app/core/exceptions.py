class DonationBotError(Exception):
    """Базовая ошибка сбора пожертвований"""


class NotFoundError(DonationBotError):
    """Запись не найдена (например, нет активной цели)"""


class DuplicateKeyError(DonationBotError):
    """Нарушение уникальности: telegram id пользователя или id платежа"""


class UnknownPaymentError(DonationBotError):
    """Подтверждение пришло для пожертвования, которого нет в базе"""

    def __init__(self, provider_payment_id: str):
        super().__init__(f"Неизвестный платеж: {provider_payment_id}")
        self.provider_payment_id = provider_payment_id


class InvalidTransitionError(DonationBotError):
    """Недопустимая смена статуса пожертвования"""


class InvalidInputError(DonationBotError):
    """Некорректные входные данные"""


class InfrastructureFailureError(DonationBotError):
    """Сбой соединения или транзакции в базе данных"""
