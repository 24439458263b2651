import uuid
from decimal import Decimal

from aiogram import Router, F, Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import StatesGroup, State
from aiogram.types import CallbackQuery, Message, PreCheckoutQuery, LabeledPrice, User
from dependency_injector.wiring import inject, Provide
from loguru import logger

from app.core.config import settings
from app.core.container import Container
from app.core.exceptions import DonationBotError, NotFoundError
from app.keyboards.donate import CUSTOM_AMOUNT_CALLBACK, get_donation_amount_keyboard
from app.keyboards.reply import DONATE_BUTTON, reply_cancel_keyboard, get_reply_keyboard
from app.schemas.telegram_user import TelegramUserEntity
from app.services.donation_service import DonationService
from app.services.telegram_user_service import TelegramUserService
from app.tasks.donation import expire_pending_donation_task
from app.utils.amounts import get_callback_value, parse_donation_amount
from app.utils.texts import get_thank_you_message

donate_router = Router()


class DonateState(StatesGroup):
    amount = State()


@donate_router.message(Command("donate"))
@donate_router.message(F.text == DONATE_BUTTON)
async def donate_menu_handler(message: Message) -> None:
    await message.answer(
        "💳 Выберите сумму пожертвования:",
        reply_markup=get_donation_amount_keyboard(settings.preset_donation_amounts),
    )


@donate_router.callback_query(F.data == CUSTOM_AMOUNT_CALLBACK)
async def custom_amount_handler(callback: CallbackQuery, state: FSMContext) -> None:
    await state.set_state(DonateState.amount)
    await callback.answer("Введите сумму пожертвования в рублях")
    await callback.message.answer(
        "💎 Введите сумму пожертвования в рублях:",
        reply_markup=reply_cancel_keyboard,
    )


@donate_router.message(DonateState.amount, F.text)
async def process_custom_amount(message: Message, state: FSMContext) -> None:
    await state.clear()

    amount = parse_donation_amount(message.text)
    if amount is None:
        await message.answer(
            "❌ Введите корректную сумму целым числом",
            reply_markup=get_reply_keyboard(),
        )
        return

    await message.answer("⏳ Формируем счет...", reply_markup=get_reply_keyboard())
    await send_donation_invoice(
        bot=message.bot,
        chat_id=message.chat.id,
        from_user=message.from_user,
        amount=amount,
    )


@donate_router.callback_query(F.data.startswith("donate_"))
async def preset_amount_handler(callback: CallbackQuery) -> None:
    amount = int(get_callback_value(callback.data))
    await callback.answer()

    await send_donation_invoice(
        bot=callback.bot,
        chat_id=callback.message.chat.id,
        from_user=callback.from_user,
        amount=amount,
    )


@inject
async def send_donation_invoice(
        bot: Bot,
        chat_id: int,
        from_user: User,
        amount: int,
        telegram_user_service: TelegramUserService = Provide[
            Container.telegram_user_service
        ],
        donation_service: DonationService = Provide[Container.donation_service],
) -> None:
    """Создание пожертвования в статусе PENDING и отправка счета"""
    if not settings.min_donation_amount <= amount <= settings.max_donation_amount:
        await bot.send_message(
            chat_id=chat_id,
            text=(
                f"❌ Сумма пожертвования должна быть от {settings.min_donation_amount} "
                f"до {settings.max_donation_amount} ₽"
            ),
        )
        return

    provider_payment_id = f"donation_{from_user.id}_{uuid.uuid4().hex}"
    try:
        await telegram_user_service.get_or_create_telegram_user(
            TelegramUserEntity(
                user_id=from_user.id,
                username=from_user.username,
                first_name=from_user.first_name,
                last_name=from_user.last_name,
            )
        )
        await donation_service.register_donation(
            user_telegram_id=from_user.id,
            amount=Decimal(amount),
            currency=settings.currency,
            provider_payment_id=provider_payment_id,
        )
    except NotFoundError:
        await bot.send_message(
            chat_id=chat_id,
            text="❌ В данный момент нет активных целей для пожертвований.",
        )
        return
    except DonationBotError:
        logger.exception(f"Не удалось создать пожертвование от {from_user.id}")
        await bot.send_message(
            chat_id=chat_id,
            text="❌ Произошла ошибка при создании платежа. Попробуйте позже.",
        )
        return

    try:
        await bot.send_invoice(
            chat_id=chat_id,
            title="Пожертвование",
            description=f"Пожертвование на текущую цель: {amount} ₽",
            payload=provider_payment_id,
            provider_token=settings.payment_provider_token,
            currency=settings.currency,
            prices=[LabeledPrice(label="Пожертвование", amount=amount * 100)],
        )
    except TelegramAPIError:
        logger.exception(f"Не удалось отправить счет {provider_payment_id}")
        try:
            await donation_service.fail_donation(provider_payment_id)
        except DonationBotError:
            logger.exception(f"Не удалось отклонить пожертвование {provider_payment_id}")
        await bot.send_message(
            chat_id=chat_id,
            text="❌ Произошла ошибка при создании платежа. Попробуйте позже.",
        )
        return

    expire_pending_donation_task.apply_async(
        args=[provider_payment_id, chat_id],
        countdown=settings.donation_expire_seconds,
    )


@donate_router.pre_checkout_query()
@inject
async def pre_checkout_handler(
        query: PreCheckoutQuery,
        donation_service: DonationService = Provide[Container.donation_service],
) -> None:
    try:
        is_payable = await donation_service.is_payable(query.invoice_payload)
    except DonationBotError:
        logger.exception(f"Не удалось проверить платеж {query.invoice_payload}")
        is_payable = False

    if is_payable:
        await query.answer(ok=True)
        return

    await query.answer(
        ok=False,
        error_message="Счет устарел. Создайте новое пожертвование.",
    )


@donate_router.message(F.successful_payment)
@inject
async def successful_payment_handler(
        message: Message,
        donation_service: DonationService = Provide[Container.donation_service],
) -> None:
    payment = message.successful_payment
    try:
        goal = await donation_service.confirm_donation(payment.invoice_payload)
    except DonationBotError:
        logger.exception(
            f"Не удалось учесть платеж {payment.invoice_payload}, "
            f"charge id {payment.telegram_payment_charge_id}"
        )
        await message.answer(
            "❌ Платеж получен, но пожертвование не удалось учесть. "
            "Мы уже разбираемся."
        )
        return

    amount = Decimal(payment.total_amount) / 100
    await message.answer(get_thank_you_message(amount, payment.currency, goal))
