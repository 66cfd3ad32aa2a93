"""Test doubles shared by the GoldAI test suites."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import redis

from goldai.app.providers import CompletionError, CompletionProvider
from goldai.app.purchase import calculate_purchase
from goldai.schemas.ledger_models import ChatExchange, Purchase

INTENT_PROMPT_PREFIX = "Analyze the following user message"
T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class StubProvider(CompletionProvider):
    """Answers intent prompts with ``intent`` and everything else with ``answer``."""

    name = "stub"
    model = "stub-model"

    def __init__(self, intent="NO", answer="Gold has held its value for centuries."):
        self.intent = intent
        self.answer = answer
        self.prompts = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if prompt.startswith(INTENT_PROMPT_PREFIX):
            return self.intent
        return self.answer


class FailingProvider(StubProvider):
    """Raises CompletionError on the intent call or on the reply call."""

    def __init__(self, fail_on="intent", **kwargs):
        super().__init__(**kwargs)
        self.fail_on = fail_on

    def complete(self, prompt: str) -> str:
        is_intent = prompt.startswith(INTENT_PROMPT_PREFIX)
        if (self.fail_on == "intent") == is_intent:
            self.prompts.append(prompt)
            raise CompletionError("provider down")
        return super().complete(prompt)


class FakeRedis:
    """Just enough of redis.Redis for the ledger: hashes and lists of strings."""

    def __init__(self):
        self.hashes = {}
        self.lists = {}

    def ping(self):
        return True

    def hset(self, key, field, value):
        self.hashes.setdefault(key, {})[field] = value
        return 1

    def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    def hvals(self, key):
        return list(self.hashes.get(key, {}).values())

    def rpush(self, key, value):
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    def lrange(self, key, start, end):
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]


class DownRedis(FakeRedis):
    def __getattribute__(self, name):
        if name in ("hset", "hget", "hvals", "rpush", "lrange"):
            def broken(*args):
                raise redis.ConnectionError("connection refused")
            return broken
        return super().__getattribute__(name)


def make_purchase(user_id, amount, price="10000", minutes=0) -> Purchase:
    breakdown = calculate_purchase(Decimal(amount), Decimal(price))
    return Purchase(user_id=user_id, created_at=T0 + timedelta(minutes=minutes), **breakdown.model_dump())


def make_exchange(user_id, message, minutes=0, intent=False) -> ChatExchange:
    return ChatExchange(
        user_id=user_id,
        message=message,
        response=f"reply to {message}",
        is_investment_intent=intent,
        created_at=T0 + timedelta(minutes=minutes),
    )
