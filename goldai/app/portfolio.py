"""Portfolio snapshot: a per-request aggregate over a user's purchases."""

from decimal import ROUND_HALF_UP, Decimal

from ..schemas.ledger_models import GRAMS, MONEY, PortfolioSnapshot

RECENT_PURCHASES = 5


def build_snapshot(ledger, user_id: str, price_per_gram) -> PortfolioSnapshot:
    """Value a user's holdings at ``price_per_gram``. Nothing is cached."""
    purchases = ledger.purchases_for_user(user_id)
    total_gold = ledger.total_gold_for_user(user_id).quantize(GRAMS, rounding=ROUND_HALF_UP)
    total_invested = sum((p.amount_invested for p in purchases), Decimal("0")).quantize(MONEY)

    current_value = (total_gold * Decimal(price_per_gram)).quantize(MONEY, rounding=ROUND_HALF_UP)
    total_gains = current_value - total_invested
    if total_invested > 0:
        gains_percentage = (total_gains / total_invested * 100).quantize(MONEY, rounding=ROUND_HALF_UP)
    else:
        gains_percentage = Decimal("0.00")

    return PortfolioSnapshot(
        total_gold=total_gold,
        total_invested=total_invested,
        current_value=current_value,
        total_gains=total_gains,
        gains_percentage=gains_percentage,
        purchases=purchases[:RECENT_PURCHASES],
    )
