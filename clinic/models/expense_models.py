from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric
from datetime import datetime
from ..database import Base

class Expense(Base):
    __tablename__ = "expenses"
    id = Column(Integer, primary_key=True, index=True)
    date = Column(DateTime, default=datetime.now, nullable=False, index=True)
    expense_type = Column(String, nullable=False, index=True)  # Rent, Salary, Supplies...
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
