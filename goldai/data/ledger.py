"""Ledger store: append-only users, purchases and chat exchanges.

Every backend offers the same whole-record operations. Nothing is updated or
deleted once written, and the only index is the owning user id.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional

from ..app.config import Config
from ..schemas.ledger_models import GRAMS, ChatExchange, Purchase, User, make_record
from ..utils.logger import get_logger

logger = get_logger()


class LedgerStore(ABC):
    name: str = "base"

    # users

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def add_user(self, user: User) -> User:
        """Store ``user`` as given."""
        ...

    def create_user(self, username: str, password: str) -> User:
        return self.add_user(make_record(User, username=username, password=password))

    def ensure_user(self, user: User) -> User:
        """Store ``user`` unless a user with its id already exists."""
        existing = self.get_user(user.id)
        if existing is not None:
            return existing
        return self.add_user(user)

    # purchases

    @abstractmethod
    def record_purchase(self, purchase: Purchase) -> Purchase:
        ...

    @abstractmethod
    def purchases_for_user(self, user_id: str) -> List[Purchase]:
        """Newest first."""
        ...

    def total_gold_for_user(self, user_id: str) -> Decimal:
        total = sum((p.gold_quantity for p in self.purchases_for_user(user_id)), Decimal("0"))
        return total.quantize(GRAMS)

    # chat

    @abstractmethod
    def record_exchange(self, exchange: ChatExchange) -> ChatExchange:
        ...

    @abstractmethod
    def exchanges_for_user(self, user_id: str) -> List[ChatExchange]:
        """Oldest first."""
        ...


class MemoryLedger(LedgerStore):
    """Process-local ledger. State lives on the instance only."""

    name = "memory"

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.purchases: List[Purchase] = []
        self.exchanges: List[ChatExchange] = []

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def add_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    def record_purchase(self, purchase: Purchase) -> Purchase:
        self.purchases.append(purchase)
        return purchase

    def purchases_for_user(self, user_id: str) -> List[Purchase]:
        # reversed() first so equal timestamps keep newest-inserted first
        mine = [p for p in reversed(self.purchases) if p.user_id == user_id]
        return sorted(mine, key=lambda p: p.created_at, reverse=True)

    def record_exchange(self, exchange: ChatExchange) -> ChatExchange:
        self.exchanges.append(exchange)
        return exchange

    def exchanges_for_user(self, user_id: str) -> List[ChatExchange]:
        mine = [e for e in self.exchanges if e.user_id == user_id]
        return sorted(mine, key=lambda e: e.created_at)


def create_ledger(config=Config) -> LedgerStore:
    """Build the single ledger backend named by ``config.LEDGER_BACKEND``."""
    backend = config.LEDGER_BACKEND
    if backend == "memory":
        ledger = MemoryLedger()
    elif backend == "sql":
        from .sql_ledger import SqlLedger
        ledger = SqlLedger.from_url(config.DATABASE_URL)
    elif backend == "redis":
        from .redis_ledger import RedisLedger
        ledger = RedisLedger.from_config(config)
    else:
        raise ValueError(f"Unknown ledger backend: {backend}")
    logger.info("Ledger backend: %s", ledger.name)
    return ledger
