from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .database import Base


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    purchases = relationship("PurchaseRow", back_populates="user")
    chat_messages = relationship("ChatMessageRow", back_populates="user")


class PurchaseRow(Base):
    __tablename__ = "purchases"

    # insertion order, breaks ties between equal created_at values
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False)
    user_id = Column(String(64), ForeignKey("users.id"), index=True, nullable=False)
    amount_invested = Column(Numeric(10, 2), nullable=False)
    gold_quantity = Column(Numeric(10, 6), nullable=False)
    price_per_gram = Column(Numeric(10, 2), nullable=False)
    platform_fee = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), index=True, nullable=False)

    user = relationship("UserRow", back_populates="purchases")


class ChatMessageRow(Base):
    __tablename__ = "chat_messages"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False)
    user_id = Column(String(64), ForeignKey("users.id"), index=True, nullable=False)
    message = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    is_investment_intent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), index=True, nullable=False)

    user = relationship("UserRow", back_populates="chat_messages")
