"""Money helpers.

Amounts are integer cents. Fractional intermediate values are Decimals and
are rounded half-up to whole cents, so repeated calculations never drift.
"""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def round_cents(value: Decimal) -> int:
    """Round a Decimal amount of cents half-up to whole cents."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def apply_rate(amount_cents: int, rate: Decimal) -> int:
    """Multiply an amount in cents by a fraction and round to cents.

    >>> apply_rate(30000, Decimal("0.1"))
    3000
    """
    return round_cents(Decimal(amount_cents) * rate)


def percentage_of(amount_cents: int, percentage: int) -> int:
    """Take a whole-number percentage of an amount, rounded to cents."""
    return round_cents(Decimal(amount_cents) * Decimal(percentage) / Decimal(100))


def to_cents(amount: Decimal | int | str) -> int:
    """Convert a major-unit amount (e.g. dollars) to cents."""
    return round_cents(Decimal(str(amount)) * 100)


def format_money(amount_cents: int, currency: str = "USD") -> str:
    """Format cents for display, e.g. ``$1,299.99``."""
    sign = "-" if amount_cents < 0 else ""
    major, minor = divmod(abs(amount_cents), 100)
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        return f"{sign}{symbol}{major:,}.{minor:02d}"
    return f"{sign}{major:,}.{minor:02d} {currency.upper()}"
