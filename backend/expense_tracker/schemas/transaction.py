# expense_tracker/schemas/transaction.py
import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from decimal import Decimal


class TransactionOut(BaseModel):
    id: int
    date: Optional[datetime.date]
    category: Optional[str]
    type: Optional[str]
    amount: Optional[Decimal]
    user_id: int

    model_config = ConfigDict(from_attributes=True)


class Totals(BaseModel):
    totalIncome: Decimal = Decimal("0")
    totalExpenses: Decimal = Decimal("0")
    totalBalance: Decimal = Decimal("0")


class Dashboard(Totals):
    user: str
    transactions: List[TransactionOut]


class NewTransactionForm(BaseModel):
    # blank form: every field starts empty
    date: Optional[datetime.date] = None
    category: Optional[str] = None
    type: Optional[str] = None
    amount: Optional[Decimal] = None
