"""Money formatting for reports and chart labels."""


def _group(amount: float, decimals: int, thousands: str, decimal_point: str) -> str:
    rounded = round(amount, decimals)
    text = f"{abs(rounded):,.{decimals}f}"
    text = text.replace(",", "\0").replace(".", decimal_point).replace("\0", thousands)
    # -0.4 rounds to "0", not "-0"
    return f"-{text}" if rounded < 0 else text


def format_money(amount: float, currency: str = "USD", decimals: int = 0) -> str:
    """Format amount for display.

    USD → "$1,234", EUR → "1 234 €" (French grouping), anything else → "1,234 XYZ".
    """
    code = currency.upper()
    if code == "USD":
        text = _group(amount, decimals, ",", ".")
        if text.startswith("-"):
            return f"-${text[1:]}"
        return f"${text}"
    if code == "EUR":
        return f"{_group(amount, decimals, ' ', ',')} €"
    return f"{_group(amount, decimals, ',', '.')} {code}"


def format_percent(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{decimals}f}%"
