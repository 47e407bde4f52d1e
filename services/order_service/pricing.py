from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")

# Numeric(12, 2) columns hold at most ten integer digits
MAX_UNIT_PRICE = 10_000_000_000


def to_money(value) -> Decimal:
    """Round to cents, half-up. Goes through str() so 0.1 + 0.2 becomes 0.30."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
