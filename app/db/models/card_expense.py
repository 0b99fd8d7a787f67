from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class CardExpense(Base):
    id = Column(Integer, primary_key=True, index=True)
    card_id = Column(Integer, ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    purchase_date = Column(DateTime, nullable=False, index=True)
    category = Column(String(100), nullable=False, default="GERAL")
    installments = Column(JSON, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)

    card = relationship("CreditCard", back_populates="expenses")
