# expense_tracker/services/ledger.py
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from expense_tracker.db import models


class LedgerError(Exception):
    """A value could not be stored in its column."""


# Numeric(12, 2): ten integer digits, two decimal places
CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal(10) ** 10

# ids outside a signed 64-bit integer cannot name a row
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def _coerce_date(value: Union[str, date, None]) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise LedgerError(f"invalid date: {value!r}")


def _coerce_amount(value: Union[str, Decimal, int, None]) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise LedgerError(f"invalid amount: {value!r}")
    if not amount.is_finite() or abs(amount) >= MAX_AMOUNT:
        raise LedgerError(f"invalid amount: {value!r}")
    if amount != amount.quantize(CENTS):
        raise LedgerError(f"amount has more than two decimal places: {value!r}")
    return amount


def list_by_user(db: Session, user_id: int) -> List[models.Transaction]:
    # storage order; no ORDER BY
    return db.query(models.Transaction).filter(models.Transaction.user_id == user_id).all()


def insert(db: Session, date, category, type, amount, user_id: int) -> models.Transaction:
    """
    Store a transaction. `type` and `category` pass through unchecked;
    `date` and `amount` are only converted to what their columns hold.
    """
    txn = models.Transaction(
        date=_coerce_date(date),
        category=category,
        type=type,
        amount=_coerce_amount(amount),
        user_id=user_id,
    )
    db.add(txn)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(txn)
    return txn


def delete_by_id(db: Session, txn_id: int) -> int:
    """Delete one transaction by id, whoever owns it. Returns rows removed."""
    if not MIN_ID <= txn_id <= MAX_ID:
        return 0
    try:
        deleted = db.query(models.Transaction).filter(models.Transaction.id == txn_id).delete(
            synchronize_session=False
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    return deleted
