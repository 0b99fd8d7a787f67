from sqlalchemy import Column, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class CreditCard(Base):
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    limit = Column(Numeric(12, 2), nullable=False)
    closing_day = Column(Integer, nullable=False)
    due_day = Column(Integer, nullable=False)

    expenses = relationship("CardExpense", back_populates="card", passive_deletes=True)
    payments = relationship("Transaction", back_populates="related_card", passive_deletes=True)
