from aiogram import Router, F
from aiogram.filters import CommandStart, Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from dependency_injector.wiring import inject, Provide
from loguru import logger

from app.core.container import Container
from app.core.exceptions import DonationBotError
from app.keyboards.reply import (
    get_reply_keyboard,
    REFRESH_BUTTON,
    STATS_BUTTON,
    CANCEL_BUTTON,
)
from app.schemas.telegram_user import TelegramUserEntity
from app.services.goal_creation_state import GoalCreationStateStore
from app.services.goal_service import GoalService
from app.services.telegram_user_service import TelegramUserService
from app.utils.texts import get_goal_progress_message, get_goal_stats_message

start_router = Router()

ERROR_MESSAGE = "❌ Произошла ошибка при получении статистики."


@start_router.message(CommandStart())
@start_router.message(F.text == REFRESH_BUTTON)
@inject
async def command_start(
        message: Message,
        telegram_user_service: TelegramUserService = Provide[
            Container.telegram_user_service
        ],
        goal_service: GoalService = Provide[Container.goal_service],
) -> None:
    user_dict = message.from_user.model_dump()
    user_dict["user_id"] = user_dict.pop("id")

    try:
        current_user = await telegram_user_service.get_or_create_telegram_user(
            TelegramUserEntity(**user_dict)
        )
        goal = await goal_service.get_active_goal()
    except DonationBotError:
        logger.exception(f"Не удалось обработать /start от {message.from_user.id}")
        await message.answer(ERROR_MESSAGE)
        return

    await message.answer(
        f"👋 Привет, {message.from_user.first_name}!\n\n"
        f"{get_goal_progress_message(goal)}",
        reply_markup=get_reply_keyboard(current_user.is_admin),
    )


@start_router.message(Command("stats"))
@start_router.message(F.text == STATS_BUTTON)
@inject
async def stats_handler(
        message: Message,
        goal_service: GoalService = Provide[Container.goal_service],
) -> None:
    try:
        stats = await goal_service.get_goal_stats()
    except DonationBotError:
        logger.exception("Не удалось получить статистику цели")
        await message.answer(ERROR_MESSAGE)
        return

    await message.answer(get_goal_stats_message(stats))


@start_router.message(Command("cancel"))
@start_router.message(F.text == CANCEL_BUTTON)
@inject
async def cancel_handler(
        message: Message,
        state: FSMContext,
        telegram_user_service: TelegramUserService = Provide[
            Container.telegram_user_service
        ],
        goal_creation_state_store: GoalCreationStateStore = Provide[
            Container.goal_creation_state_store
        ],
):
    goal_creation_state_store.cancel_goal_creation(message.from_user.id)
    await state.clear()

    is_admin = await telegram_user_service.is_admin(message.from_user.id)
    await message.answer(
        text="Действие отменено",
        reply_markup=get_reply_keyboard(is_admin),
    )
