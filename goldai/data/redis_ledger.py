"""Redis-backed ledger.

Records are stored as JSON documents. Each user owns two append-only
lists (purchases, chat exchanges) in insertion order; users live in one hash
keyed by id.
"""
from typing import List, Optional

import redis

from ..app.config import Config
from ..app.errors import StorageUnavailable
from ..schemas.ledger_models import ChatExchange, Purchase, User
from ..utils.logger import get_logger
from .ledger import LedgerStore

logger = get_logger()

KEY_PREFIX = "goldai"


class RedisLedger(LedgerStore):
    name = "redis"

    def __init__(self, client):
        self.redis_client = client

    @classmethod
    def from_config(cls, config=Config) -> "RedisLedger":
        client = redis.Redis(
            host=config.REDIS_HOST,
            port=config.REDIS_PORT,
            db=config.REDIS_DB,
            decode_responses=True,
        )
        try:
            client.ping()
        except redis.RedisError as e:
            raise StorageUnavailable() from e
        return cls(client)

    def _users_key(self) -> str:
        return f"{KEY_PREFIX}:users"

    def _purchases_key(self, user_id: str) -> str:
        return f"{KEY_PREFIX}:purchases:{user_id}"

    def _exchanges_key(self, user_id: str) -> str:
        return f"{KEY_PREFIX}:chat:{user_id}"

    def _call(self, method: str, *args):
        try:
            return getattr(self.redis_client, method)(*args)
        except redis.RedisError as e:
            logger.error("Ledger redis error on %s: %s", method, e)
            raise StorageUnavailable() from e

    # users

    def get_user(self, user_id: str) -> Optional[User]:
        raw = self._call("hget", self._users_key(), user_id)
        return User.model_validate_json(raw) if raw else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        for raw in self._call("hvals", self._users_key()):
            user = User.model_validate_json(raw)
            if user.username == username:
                return user
        return None

    def add_user(self, user: User) -> User:
        self._call("hset", self._users_key(), user.id, user.model_dump_json())
        return user

    # purchases

    def record_purchase(self, purchase: Purchase) -> Purchase:
        self._call("rpush", self._purchases_key(purchase.user_id), purchase.model_dump_json())
        return purchase

    def purchases_for_user(self, user_id: str) -> List[Purchase]:
        raws = self._call("lrange", self._purchases_key(user_id), 0, -1)
        purchases = [Purchase.model_validate_json(r) for r in reversed(raws)]
        return sorted(purchases, key=lambda p: p.created_at, reverse=True)

    # chat

    def record_exchange(self, exchange: ChatExchange) -> ChatExchange:
        self._call("rpush", self._exchanges_key(exchange.user_id), exchange.model_dump_json())
        return exchange

    def exchanges_for_user(self, user_id: str) -> List[ChatExchange]:
        raws = self._call("lrange", self._exchanges_key(user_id), 0, -1)
        exchanges = [ChatExchange.model_validate_json(r) for r in raws]
        return sorted(exchanges, key=lambda e: e.created_at)
