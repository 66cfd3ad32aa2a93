"""SQLAlchemy-backed ledger (sqlite by default, any SQLAlchemy URL works)."""
from contextlib import contextmanager
from datetime import timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..app.errors import StorageUnavailable
from ..schemas.ledger_models import GRAMS, MONEY, ChatExchange, Purchase, User
from ..utils.logger import get_logger
from .database import create_tables, make_engine, make_session_factory
from .ledger import LedgerStore
from .models import ChatMessageRow, PurchaseRow, UserRow

logger = get_logger()


def _aware(dt):
    # sqlite hands back naive datetimes; everything is written in UTC
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


class SqlLedger(LedgerStore):
    name = "sql"

    def __init__(self, session_factory):
        self.SessionLocal = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SqlLedger":
        engine = make_engine(database_url)
        try:
            create_tables(engine)
        except SQLAlchemyError as e:
            raise StorageUnavailable() from e
        return cls(make_session_factory(engine))

    @contextmanager
    def _session(self):
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Ledger database error: %s", e)
            raise StorageUnavailable() from e
        finally:
            db.close()

    # row <-> record

    @staticmethod
    def _user(row: UserRow) -> User:
        return User(id=row.id, username=row.username, password=row.password)

    @staticmethod
    def _purchase(row: PurchaseRow) -> Purchase:
        return Purchase(
            id=row.id,
            user_id=row.user_id,
            amount_invested=Decimal(row.amount_invested).quantize(MONEY),
            gold_quantity=Decimal(row.gold_quantity).quantize(GRAMS),
            price_per_gram=Decimal(row.price_per_gram).quantize(MONEY),
            platform_fee=Decimal(row.platform_fee).quantize(MONEY),
            total_amount=Decimal(row.total_amount).quantize(MONEY),
            created_at=_aware(row.created_at),
        )

    @staticmethod
    def _exchange(row: ChatMessageRow) -> ChatExchange:
        return ChatExchange(
            id=row.id,
            user_id=row.user_id,
            message=row.message,
            response=row.response,
            is_investment_intent=row.is_investment_intent,
            created_at=_aware(row.created_at),
        )

    # users

    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as db:
            row = db.get(UserRow, user_id)
            return self._user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            row = db.query(UserRow).filter(UserRow.username == username).first()
            return self._user(row) if row else None

    def add_user(self, user: User) -> User:
        with self._session() as db:
            db.add(UserRow(id=user.id, username=user.username, password=user.password))
        return user

    # purchases

    def record_purchase(self, purchase: Purchase) -> Purchase:
        with self._session() as db:
            db.add(PurchaseRow(
                id=purchase.id,
                user_id=purchase.user_id,
                amount_invested=purchase.amount_invested,
                gold_quantity=purchase.gold_quantity,
                price_per_gram=purchase.price_per_gram,
                platform_fee=purchase.platform_fee,
                total_amount=purchase.total_amount,
                created_at=purchase.created_at,
            ))
        return purchase

    def purchases_for_user(self, user_id: str) -> List[Purchase]:
        with self._session() as db:
            rows = (db.query(PurchaseRow)
                    .filter(PurchaseRow.user_id == user_id)
                    .order_by(PurchaseRow.created_at.desc(), PurchaseRow.seq.desc())
                    .all())
            return [self._purchase(r) for r in rows]

    def total_gold_for_user(self, user_id: str) -> Decimal:
        with self._session() as db:
            total = (db.query(func.coalesce(func.sum(PurchaseRow.gold_quantity), 0))
                     .filter(PurchaseRow.user_id == user_id)
                     .scalar())
        return Decimal(str(total)).quantize(GRAMS)

    # chat

    def record_exchange(self, exchange: ChatExchange) -> ChatExchange:
        with self._session() as db:
            db.add(ChatMessageRow(
                id=exchange.id,
                user_id=exchange.user_id,
                message=exchange.message,
                response=exchange.response,
                is_investment_intent=exchange.is_investment_intent,
                created_at=exchange.created_at,
            ))
        return exchange

    def exchanges_for_user(self, user_id: str) -> List[ChatExchange]:
        with self._session() as db:
            rows = (db.query(ChatMessageRow)
                    .filter(ChatMessageRow.user_id == user_id)
                    .order_by(ChatMessageRow.created_at.asc(), ChatMessageRow.seq.asc())
                    .all())
            return [self._exchange(r) for r in rows]
