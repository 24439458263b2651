from decimal import Decimal

from aiogram import html

from app.schemas.donation_goal import DonationGoalEntity, GoalStats

NO_ACTIVE_GOAL_MESSAGE = "🎯 На данный момент нет активных целей для сбора."
PROGRESS_BAR_LENGTH = 10


def format_amount(amount: Decimal) -> str:
    """1234567.5 -> '1 234 568'"""
    return f"{amount:,.0f}".replace(",", " ")


def get_progress_bar(percent: float) -> str:
    if percent >= 100:
        return f"[{'■' * PROGRESS_BAR_LENGTH}]"

    filled = round(percent / 10)
    empty = PROGRESS_BAR_LENGTH - filled

    return f"[{'■' * filled}{'□' * empty}]"


def get_goal_progress_message(goal: DonationGoalEntity | None) -> str:
    if goal is None:
        return NO_ACTIVE_GOAL_MESSAGE

    percent = goal.progress_percent

    return (
        f"🎯 {html.bold(html.quote(goal.title))} — {format_amount(goal.target_amount)}₽\n"
        f"📝 Описание: {html.quote(goal.description or '')}\n\n"
        f"Собрано: {format_amount(goal.current_amount)}₽ ({percent:.1f}%)\n"
        f"{get_progress_bar(percent)}"
    )


def get_goal_stats_message(stats: GoalStats) -> str:
    goal = stats.goal
    if goal is None:
        return NO_ACTIVE_GOAL_MESSAGE

    percent = goal.progress_percent
    created_at = goal.created_at.strftime("%d.%m.%Y") if goal.created_at else "—"

    return (
        f"🎯 {html.bold(html.quote(goal.title))} — {format_amount(goal.target_amount)}₽\n"
        f"📝 Описание: {html.quote(goal.description or '')}\n\n"
        f"📈 Количество пожертвований на текущую цель: {stats.donations_count}\n"
        f"🧮 Количество пожертвовавших: {stats.donors_count}\n"
        f"⏳ Дата открытия сбора: {created_at}\n\n"
        f"Собрано: {format_amount(goal.current_amount)}₽ ({percent:.1f}%)\n"
        f"{get_progress_bar(percent)}"
    )


def get_goal_created_message(goal: DonationGoalEntity) -> str:
    return (
        "✅ Цель создана!\n"
        f"🎯 {html.quote(goal.title)}\n"
        f"💫 Описание: {html.quote(goal.description or '')}\n"
        f"💰 Сумма: {format_amount(goal.target_amount)}₽"
    )


def get_thank_you_message(amount: Decimal, currency: str, goal: DonationGoalEntity | None) -> str:
    message = (
        "🙏 Спасибо за пожертвование!\n"
        f"💰 Сумма: {format_amount(amount)} {currency}\n\n"
    )
    if goal is not None:
        message += get_goal_progress_message(goal)

    return message
