import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Transaction(Base):
    id = Column(Integer, primary_key=True, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String(10), nullable=False)
    category = Column(String(100), nullable=False, default="GERAL")
    date = Column(DateTime, nullable=False, index=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    installments = Column(JSON, nullable=True)
    group_id = Column(String(100), nullable=True)
    # Set when the transaction is a payment of a card bill
    related_card_id = Column(Integer, ForeignKey("credit_cards.id", ondelete="SET NULL"), nullable=True, index=True)

    related_card = relationship("CreditCard", back_populates="payments")
