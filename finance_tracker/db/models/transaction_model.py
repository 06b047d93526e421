import datetime
from enum import Enum
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionModel(BaseModel):
    """
    Transaction record stored in the ``transactions`` collection.

    ``amount`` is an unsigned magnitude; ``type`` gives the direction.
    Every field is optional at this level so the service can report a
    missing value with its own rule message instead of a parse error.
    """

    id: Optional[str] = None                  # assigned by storage on first save
    description: Optional[str] = None
    amount: Optional[float] = None
    type: Optional[TransactionType] = None
    date: Optional[datetime.date] = None      # calendar date, no time of day
    category: Optional[str] = None            # free text label

    class Config:
        from_attributes = True


def to_document(txn: TransactionModel) -> Dict[str, Any]:
    """Build the Mongo document for ``txn`` (without ``_id``).

    BSON has no date-only type, so ``date`` is stored as midnight.
    """
    stored_date = None
    if txn.date is not None:
        stored_date = datetime.datetime(txn.date.year, txn.date.month, txn.date.day)

    return {
        "description": txn.description,
        "amount": txn.amount,
        "type": txn.type.value if txn.type is not None else None,
        "date": stored_date,
        "category": txn.category,
    }


def from_document(doc: Dict[str, Any]) -> TransactionModel:
    stored_date = doc.get("date")
    if isinstance(stored_date, datetime.datetime):
        stored_date = stored_date.date()

    raw_id = doc.get("_id")
    return TransactionModel(
        id=str(raw_id) if isinstance(raw_id, ObjectId) else raw_id,
        description=doc.get("description"),
        amount=doc.get("amount"),
        type=doc.get("type"),
        date=stored_date,
        category=doc.get("category"),
    )
