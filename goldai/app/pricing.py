"""
Simulated gold price feed.

There is no market data behind this: every quote is the base price plus
uniform noise, so two calls never agree. The random source and the spread
are injectable for deterministic tests.
"""

import random
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..schemas.ledger_models import GoldQuote
from .config import Config

PLACEHOLDER_VOLUME = "2.4M"
PERCENT = Decimal("0.01")


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class GoldPricer:
    """Quotes a per-gram gold price jittered around a fixed base."""

    def __init__(self, base_price=None, spread=None, rng: Optional[random.Random] = None):
        self.base_price = Decimal(str(base_price if base_price is not None else Config.GOLD_BASE_PRICE))
        self.spread = Decimal(str(spread if spread is not None else Config.PRICE_SPREAD))
        self.rng = rng or random.Random()
        if self.base_price <= 0:
            raise ValueError("Base price must be positive")

    def _jitter(self) -> Decimal:
        half_width = float(self.spread) / 2
        return Decimal(str(self.rng.uniform(-half_width, half_width)))

    def quote(self) -> GoldQuote:
        jitter = self._jitter()
        current = _round_half_up(self.base_price + jitter)
        swing = abs(jitter) / 2
        return GoldQuote(
            current_price=current,
            change_24h=(jitter / self.base_price * 100).quantize(PERCENT, rounding=ROUND_HALF_UP),
            high_24h=_round_half_up(current + swing),
            low_24h=_round_half_up(current - swing),
            volume=PLACEHOLDER_VOLUME,
            last_updated=datetime.now(timezone.utc),
        )

    def current_price(self) -> Decimal:
        """Price per gram used for purchases and portfolio valuation."""
        return Decimal(self.quote().current_price)

    def indicative_price(self) -> int:
        """The un-jittered base price quoted in chat replies."""
        return _round_half_up(self.base_price)
