from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery
from dependency_injector.wiring import inject, Provide
from loguru import logger

from app.core.config import settings
from app.core.container import Container
from app.core.exceptions import DonationBotError
from app.keyboards.donate import (
    GOAL_CANCEL_CALLBACK,
    GOAL_RETRY_CALLBACK,
    get_goal_retry_keyboard,
)
from app.keyboards.reply import CREATE_GOAL_BUTTON, get_reply_keyboard, reply_cancel_keyboard
from app.services.goal_creation_state import GoalCreationStateStore, GoalCreationStep
from app.services.goal_service import GoalService
from app.services.telegram_user_service import TelegramUserService
from app.utils.amounts import parse_amount
from app.utils.texts import get_goal_created_message

admin_router = Router()


@inject
async def is_creating_goal(
        message: Message,
        goal_creation_state_store: GoalCreationStateStore = Provide[
            Container.goal_creation_state_store
        ],
) -> bool:
    return goal_creation_state_store.is_user_creating_goal(message.from_user.id)


@admin_router.message(Command("addgoal"))
@admin_router.message(F.text == CREATE_GOAL_BUTTON)
@inject
async def start_goal_creation_handler(
        message: Message,
        telegram_user_service: TelegramUserService = Provide[
            Container.telegram_user_service
        ],
        goal_creation_state_store: GoalCreationStateStore = Provide[
            Container.goal_creation_state_store
        ],
) -> None:
    if not await telegram_user_service.is_admin(message.from_user.id):
        logger.warning(f"Попытка создать цель без прав администратора: {message.from_user.id}")
        await message.answer("❌ Вы не являетесь админом")
        return

    goal_creation_state_store.start_goal_creation(
        admin_id=message.from_user.id, chat_id=message.chat.id
    )
    await message.answer(
        "🎯 Введите название новой цели:",
        reply_markup=reply_cancel_keyboard,
    )


@admin_router.message(F.text, is_creating_goal)
@inject
async def goal_creation_input_handler(
        message: Message,
        goal_creation_state_store: GoalCreationStateStore = Provide[
            Container.goal_creation_state_store
        ],
) -> None:
    admin_id = message.from_user.id
    state = goal_creation_state_store.get_state(admin_id)
    if state is None:
        return

    text = message.text.strip()

    if state.step == GoalCreationStep.WAITING_FOR_TITLE:
        if len(text) >= settings.max_goal_title_length:
            goal_creation_state_store.cancel_goal_creation(admin_id)
            await message.answer(
                "❌ Слишком длинное название цели\nПопробуйте создать цель заново.",
                reply_markup=get_reply_keyboard(is_admin=True),
            )
            return

        goal_creation_state_store.set_title(admin_id, text)
        await message.answer("📝 Введите описание цели:")

    elif state.step == GoalCreationStep.WAITING_FOR_DESCRIPTION:
        goal_creation_state_store.set_description(admin_id, text)
        await message.answer("💰 Введите целевую сумму в рублях:")

    elif state.step == GoalCreationStep.WAITING_FOR_AMOUNT:
        amount = parse_amount(text)
        if amount is None or amount <= 0 or amount > settings.max_goal_target_amount:
            await message.answer(
                f"❌ Введите корректную сумму до {settings.max_goal_target_amount}"
            )
            return

        goal_creation_state_store.set_amount(admin_id, amount)
        await commit_goal(message, admin_id)


@inject
async def commit_goal(
        message: Message,
        admin_id: int,
        goal_service: GoalService = Provide[Container.goal_service],
) -> None:
    """Сохранение цели из мастера. При ошибке мастер остается заполненным"""
    try:
        goal = await goal_service.create_goal_from_state(admin_id)
    except DonationBotError:
        logger.exception(f"Не удалось создать цель администратора {admin_id}")
        await message.answer(
            "❌ Произошла ошибка при создании цели. Пожалуйста, попробуйте позже.",
            reply_markup=get_goal_retry_keyboard(),
        )
        return

    await message.answer(
        get_goal_created_message(goal),
        reply_markup=get_reply_keyboard(is_admin=True),
    )


@admin_router.callback_query(F.data == GOAL_RETRY_CALLBACK)
async def goal_retry_handler(callback: CallbackQuery) -> None:
    await callback.answer()
    await callback.message.delete()
    await commit_goal(callback.message, callback.from_user.id)


@admin_router.callback_query(F.data == GOAL_CANCEL_CALLBACK)
@inject
async def goal_cancel_handler(
        callback: CallbackQuery,
        goal_creation_state_store: GoalCreationStateStore = Provide[
            Container.goal_creation_state_store
        ],
) -> None:
    goal_creation_state_store.cancel_goal_creation(callback.from_user.id)
    await callback.answer()
    await callback.message.edit_text("Действие отменено")
