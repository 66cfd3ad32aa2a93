"""
Purchase calculation for digital gold.

Converts an invested amount into grams at a given price per gram and adds
the platform fee. No I/O; persistence happens in the ledger.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..schemas.ledger_models import FEE_RATE, GRAMS, MAX_GRAMS, MAX_MONEY, MONEY, PurchaseBreakdown, make_record
from .errors import InvalidAmount

MIN_INVESTMENT = Decimal("10")


def _to_decimal(value, what: str) -> Decimal:
    if value is None or isinstance(value, bool) or value == "":
        raise InvalidAmount(f"{what} is required")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmount(f"{what} must be a number") from exc
    if not number.is_finite():
        raise InvalidAmount(f"{what} must be a number")
    if number.adjusted() > 12:
        raise InvalidAmount(f"{what} is too large")
    return number


def calculate_purchase(amount_invested, price_per_gram) -> PurchaseBreakdown:
    """
    Compute gold quantity, platform fee and total charge.

    Args:
        amount_invested: Amount to invest, in rupees (number or numeric string)
        price_per_gram: Current price of one gram of gold

    Returns:
        PurchaseBreakdown with every field at its ledger precision

    Raises:
        InvalidAmount: If the amount is missing, non-numeric or below ₹10,
            above what the ledger can hold, or the price is not a positive number
    """
    amount = _to_decimal(amount_invested, "Investment amount")
    if amount < MIN_INVESTMENT:
        raise InvalidAmount()

    price = _to_decimal(price_per_gram, "Price per gram").quantize(MONEY, rounding=ROUND_HALF_UP)
    if price <= 0:
        raise InvalidAmount("Price per gram must be positive")
    if price > MAX_MONEY:
        raise InvalidAmount("Price per gram is too large")

    amount = amount.quantize(MONEY, rounding=ROUND_HALF_UP)
    fee = (amount * FEE_RATE).quantize(MONEY, rounding=ROUND_HALF_UP)
    grams = (amount / price).quantize(GRAMS, rounding=ROUND_HALF_UP)
    if amount + fee > MAX_MONEY or grams > MAX_GRAMS:
        raise InvalidAmount("Investment amount is too large")

    return make_record(
        PurchaseBreakdown,
        amount_invested=amount,
        gold_quantity=grams,
        price_per_gram=price,
        platform_fee=fee,
        total_amount=amount + fee,
    )
