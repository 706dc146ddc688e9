# expense_tracker/api/transactions.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_tracker.api.deps import get_current_user, get_db_dep, redirect
from expense_tracker.schemas.auth import SessionUser
from expense_tracker.schemas.transaction import Dashboard, NewTransactionForm, TransactionOut
from expense_tracker.services import aggregator, ledger

logger = logging.getLogger(__name__)
router = APIRouter(tags=["transactions"])


@router.get("/", response_model=Dashboard)
def dashboard(current_user: SessionUser = Depends(get_current_user), db: Session = Depends(get_db_dep)):
    transactions = ledger.list_by_user(db, current_user.id)
    totals = aggregator.summarize(transactions)
    return Dashboard(
        user=current_user.username,
        transactions=[TransactionOut.model_validate(t) for t in transactions],
        **totals.model_dump(),
    )


@router.post("/add", response_model=NewTransactionForm)
def new_transaction_form():
    return NewTransactionForm()


@router.post("/new")
def create_transaction(
    date: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db_dep),
):
    try:
        ledger.insert(db, date, category, type, amount, current_user.id)
    except (ledger.LedgerError, SQLAlchemyError):
        logger.exception("Could not store transaction for user %s", current_user.id)
        return PlainTextResponse("Internal Server Error", status_code=500)
    return redirect("/")


@router.post("/delete")
def delete_transaction(deleteItemId: Optional[str] = Form(None), db: Session = Depends(get_db_dep)):
    """
    Delete a transaction by id. Neither a session nor ownership of the row
    is checked.
    """
    try:
        txn_id = int(deleteItemId)
        if not ledger.MIN_ID <= txn_id <= ledger.MAX_ID:
            raise ValueError("id out of range")
    except (TypeError, ValueError):
        logger.warning("Ignoring delete for invalid id %r", deleteItemId)
        return redirect("/")
    try:
        ledger.delete_by_id(db, txn_id)
    except SQLAlchemyError:
        logger.exception("Could not delete transaction %s", txn_id)
        return PlainTextResponse("Internal Server Error", status_code=500)
    return redirect("/")
