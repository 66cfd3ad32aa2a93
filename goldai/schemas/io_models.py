"""Pydantic models for API request and response bodies."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..app.config import Config
from .ledger_models import Purchase

DEFAULT_USER_ID = Config.DEFAULT_USER_ID


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequest(ApiModel):
    message: Optional[str] = None
    user_id: str = DEFAULT_USER_ID


class ChatResponse(ApiModel):
    response: str
    has_investment_intent: bool
    gold_price: int


class PurchaseRequest(ApiModel):
    # Left untyped so a non-numeric amount surfaces as InvalidAmount (400)
    amount_invested: Any = None
    user_id: str = DEFAULT_USER_ID
    price_per_gram: Any = None


class PurchaseResponse(ApiModel):
    success: bool
    purchase: Purchase
    message: str

