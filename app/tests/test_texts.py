import uuid
from datetime import datetime
from decimal import Decimal

import pytest

from app.keyboards.donate import get_donation_amount_keyboard
from app.schemas.donation_goal import DonationGoalEntity, GoalStats
from app.utils.amounts import get_callback_value, parse_amount, parse_donation_amount
from app.utils.texts import (
    NO_ACTIVE_GOAL_MESSAGE,
    format_amount,
    get_goal_progress_message,
    get_goal_stats_message,
    get_progress_bar,
    get_thank_you_message,
)


@pytest.fixture
def goal() -> DonationGoalEntity:
    return DonationGoalEntity(
        id=uuid.uuid4(),
        title="Roof <Repair>",
        description="New roof",
        target_amount=Decimal("5000"),
        current_amount=Decimal("1250"),
        created_at=datetime(2024, 3, 1, 12, 0),
    )


@pytest.mark.parametrize(
    "percent, expected",
    [
        (0, "[□□□□□□□□□□]"),
        (25, "[■■□□□□□□□□]"),
        (60, "[■■■■■■□□□□]"),
        (100, "[■■■■■■■■■■]"),
        (250, "[■■■■■■■■■■]"),
    ],
)
def test_progress_bar(percent, expected):
    assert get_progress_bar(percent) == expected


def test_format_amount():
    assert format_amount(Decimal("1234567")) == "1 234 567"
    assert format_amount(Decimal("60")) == "60"


def test_progress_message(goal):
    message = get_goal_progress_message(goal)

    assert "Roof &lt;Repair&gt;" in message
    assert "Собрано: 1 250₽ (25.0%)" in message
    assert get_goal_progress_message(None) == NO_ACTIVE_GOAL_MESSAGE


def test_stats_message(goal):
    message = get_goal_stats_message(GoalStats(goal=goal, donations_count=4, donors_count=3))

    assert "пожертвований на текущую цель: 4" in message
    assert "Количество пожертвовавших: 3" in message
    assert "01.03.2024" in message
    assert get_goal_stats_message(GoalStats()) == NO_ACTIVE_GOAL_MESSAGE


def test_thank_you_message(goal):
    assert "500 RUB" in get_thank_you_message(Decimal("500"), "RUB", goal)
    assert "Собрано" not in get_thank_you_message(Decimal("500"), "RUB", None)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1000", Decimal("1000")),
        (" 1 500,50 ", Decimal("1500.50")),
        ("700₽", Decimal("700")),
        ("abc", None),
        ("", None),
        (None, None),
        ("NaN", None),
        ("Infinity", None),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


def test_get_callback_value():
    assert get_callback_value("donate_500") == "500"


def test_donation_amount_keyboard():
    keyboard = get_donation_amount_keyboard([100, 500, 1000])

    rows = [[button.callback_data for button in row] for row in keyboard.inline_keyboard]

    assert rows == [
        ["donate_100", "donate_500"],
        ["donate_1000"],
        ["enter_custom_amount"],
    ]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("500", 500),
        (" 1 000 ", 1000),
        ("10.5", None),
        ("²", None),
        ("0", None),
        ("-5", None),
        ("abc", None),
    ],
)
def test_parse_donation_amount(text, expected):
    assert parse_donation_amount(text) == expected
