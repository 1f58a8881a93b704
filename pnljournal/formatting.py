"""Rupee and percentage formatting for terminal output."""

CRORE = 10_000_000
LAKH = 100_000


def group_indian(integer_part: str) -> str:
    """Insert Indian digit separators: last three digits, then pairs."""
    if len(integer_part) <= 3:
        return integer_part
    head, tail = integer_part[:-3], integer_part[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency_precise(value: float) -> str:
    """Format an amount with two decimals, e.g. ₹1,23,456.78."""
    amount = value or 0.0
    sign = "-" if amount < 0 else ""
    integer_part, decimals = f"{abs(amount):.2f}".split(".")
    return f"{sign}₹{group_indian(integer_part)}.{decimals}"


def format_currency_compact(value: float) -> str:
    """Format an amount abbreviating crores (Cr) and lakhs (L).

    Examples:
        >>> format_currency_compact(25_000_000)
        '₹2.50Cr'
        >>> format_currency_compact(150_000)
        '₹1.50L'
    """
    amount = value or 0.0
    if abs(amount) >= CRORE:
        return f"₹{amount / CRORE:.2f}Cr"
    if abs(amount) >= LAKH:
        return f"₹{amount / LAKH:.2f}L"
    return format_currency_precise(amount)


def format_percentage(value: float) -> str:
    return f"{(value or 0.0):.2f}%"


def pnl_color(value: float) -> str:
    """Rich color for a signed amount."""
    return "green" if (value or 0.0) >= 0 else "red"
