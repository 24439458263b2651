from decimal import Decimal, InvalidOperation


def parse_amount(text: str | None) -> Decimal | None:
    """'1 500,50' -> Decimal('1500.50'); мусор -> None"""
    if not text:
        return None

    normalized = text.strip().replace(" ", "").replace(",", ".").rstrip("₽")
    try:
        amount = Decimal(normalized)
    except InvalidOperation:
        return None

    if not amount.is_finite():
        return None

    return amount


def get_callback_value(callback_data: str) -> str:
    callback_value = callback_data.split("_")[-1]
    return callback_value


def parse_donation_amount(text: str | None) -> int | None:
    """Сумма пожертвования в целых рублях: '500' -> 500, '10.5' / '²' -> None"""
    amount = parse_amount(text)
    if amount is None or amount <= 0 or amount != amount.to_integral_value():
        return None

    return int(amount)
