import asyncio

from aiogram.exceptions import TelegramAPIError
from loguru import logger

from app.core.celery import celery_app
from app.core.container import Container
from app.core.exceptions import InvalidTransitionError, UnknownPaymentError
from app.loader import bot
from app.services.donation_service import DonationService


async def expire_pending_donation(
        donation_service: DonationService,
        provider_payment_id: str,
        chat_id: int | None,
) -> bool:
    """
    Отклоняет пожертвование, если оно так и не было оплачено.
    Подтвержденные и уже отклоненные платежи не трогает.
    """
    try:
        is_expired = await donation_service.fail_donation(provider_payment_id)
    except (InvalidTransitionError, UnknownPaymentError) as e:
        logger.info(f"Пожертвование {provider_payment_id} не просрочено: {e}")
        return False

    if is_expired and chat_id:
        try:
            await bot.send_message(chat_id=chat_id, text="⌛ Время оплаты пожертвования вышло.")
        except TelegramAPIError:
            logger.warning(f"Не удалось уведомить {chat_id} о просроченном платеже")
        finally:
            await bot.session.close()

    return is_expired


@celery_app.task
def expire_pending_donation_task(provider_payment_id: str, chat_id: int | None = None):
    container = Container()
    donation_service = container.donation_service()
    try:
        return asyncio.run(
            expire_pending_donation(donation_service, provider_payment_id, chat_id)
        )
    finally:
        container.db().remove_session()
