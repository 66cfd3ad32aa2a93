"""Ledger records and derived views.

Records are frozen pydantic models. Field names are snake_case in Python and
camelCase on the wire. Money is carried as ``Decimal`` at the scale the
ledger declares for each column.
"""
import uuid
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..app.errors import ValidationError

FEE_RATE = Decimal("0.03")
MONEY = Decimal("0.01")
GRAMS = Decimal("0.000001")
# largest values the purchases table holds: Numeric(10, 2) and Numeric(10, 6)
MAX_MONEY = Decimal("99999999.99")
MAX_GRAMS = Decimal("9999.999999")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class LedgerModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class User(LedgerModel):
    id: str = Field(default_factory=new_id)
    username: str = Field(min_length=1)
    password: str


class PurchaseBreakdown(LedgerModel):
    """Amounts for a single purchase, before it is attributed to a user."""

    amount_invested: Decimal
    gold_quantity: Decimal
    price_per_gram: Decimal
    platform_fee: Decimal
    total_amount: Decimal

    @model_validator(mode="after")
    def _check_arithmetic(self):
        if self.amount_invested <= 0 or self.price_per_gram <= 0:
            raise ValueError("amount and price per gram must be positive")
        if self.platform_fee != (self.amount_invested * FEE_RATE).quantize(MONEY, rounding=ROUND_HALF_UP):
            raise ValueError("platform fee does not match the fee rate")
        if self.total_amount != self.amount_invested + self.platform_fee:
            raise ValueError("total amount must equal amount invested plus fee")
        if self.gold_quantity != (self.amount_invested / self.price_per_gram).quantize(GRAMS, rounding=ROUND_HALF_UP):
            raise ValueError("gold quantity does not match amount and price")
        return self


class Purchase(PurchaseBreakdown):
    id: str = Field(default_factory=new_id)
    user_id: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_breakdown(cls, user_id: str, breakdown: PurchaseBreakdown) -> "Purchase":
        return make_record(cls, user_id=user_id, **breakdown.model_dump())


class ChatExchange(LedgerModel):
    id: str = Field(default_factory=new_id)
    user_id: str = Field(min_length=1)
    message: str
    response: str
    is_investment_intent: bool
    created_at: datetime = Field(default_factory=utcnow)


class GoldQuote(LedgerModel):
    current_price: int
    # explicit aliases: the generator would produce "change24H"
    change_24h: Decimal = Field(alias="change24h")
    high_24h: int = Field(alias="high24h")
    low_24h: int = Field(alias="low24h")
    volume: str
    last_updated: datetime


class PortfolioSnapshot(LedgerModel):
    total_gold: Decimal
    total_invested: Decimal
    current_value: Decimal
    total_gains: Decimal
    gains_percentage: Decimal
    purchases: List[Purchase] = Field(default_factory=list)


def make_record(model, **fields):
    """Build a ledger record, reporting schema violations as ValidationError."""
    try:
        return model(**fields)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__} record") from e
