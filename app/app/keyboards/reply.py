from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

STATS_BUTTON = "📊 Статистика"
DONATE_BUTTON = "💳 Пожертвовать"
REFRESH_BUTTON = "🔄 Обновить"
CREATE_GOAL_BUTTON = "📝 Создать новую цель"
CANCEL_BUTTON = "Отмена ❌"


def get_reply_keyboard(is_admin: bool = False) -> ReplyKeyboardMarkup:
    second_button = CREATE_GOAL_BUTTON if is_admin else DONATE_BUTTON
    keyboard = [
        [
            KeyboardButton(text=STATS_BUTTON),
            KeyboardButton(text=second_button),
        ],
        [
            KeyboardButton(text=REFRESH_BUTTON),
        ]
    ]

    return ReplyKeyboardMarkup(keyboard=keyboard, resize_keyboard=True)


reply_cancel_keyboard = ReplyKeyboardMarkup(
    keyboard=[
        [KeyboardButton(text=CANCEL_BUTTON)]
    ],
    resize_keyboard=True
)
