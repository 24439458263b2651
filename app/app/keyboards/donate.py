from aiogram.utils.keyboard import InlineKeyboardBuilder, InlineKeyboardButton

CUSTOM_AMOUNT_CALLBACK = "enter_custom_amount"
GOAL_RETRY_CALLBACK = "goal_retry"
GOAL_CANCEL_CALLBACK = "goal_cancel"


def get_inline_keyboard(*, buttons: dict[str, str], sizes: tuple = (1, 1)):
    keyboard = InlineKeyboardBuilder()

    for text, data in buttons.items():
        keyboard.add(InlineKeyboardButton(text=text, callback_data=data))

    return keyboard.adjust(*sizes).as_markup()


def get_donation_amount_keyboard(amounts: list[int]):
    """Кнопки с готовыми суммами по две в ряд и кнопка своей суммы"""
    buttons = {f"{amount} ₽": f"donate_{amount}" for amount in amounts}
    buttons["💎 Другая сумма"] = CUSTOM_AMOUNT_CALLBACK

    sizes = (2,) * (len(amounts) // 2) + (1,) * (len(amounts) % 2) + (1,)
    return get_inline_keyboard(buttons=buttons, sizes=sizes)


def get_goal_retry_keyboard():
    return get_inline_keyboard(
        buttons={
            "🔁 Повторить": GOAL_RETRY_CALLBACK,
            "Отмена ❌": GOAL_CANCEL_CALLBACK,
        },
        sizes=(2,),
    )
