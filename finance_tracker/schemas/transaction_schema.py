# finance_tracker/schemas/transaction_schema.py

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.db.models.transaction_model import TransactionModel, TransactionType


class TransactionCreate(BaseModel):
    """Request body for POST and PUT. A client-sent ``id`` is ignored."""

    description: str
    amount: float = Field(..., allow_inf_nan=False)
    type: TransactionType
    date: datetime.date
    category: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "description": "Monthly salary",
                "amount": 2500.0,
                "type": "INCOME",
                "date": "2024-01-31",
                "category": "Salary",
            }
        }

    def to_model(self) -> TransactionModel:
        return TransactionModel(
            description=self.description,
            amount=self.amount,
            type=self.type,
            date=self.date,
            category=self.category,
        )


class TransactionResponse(BaseModel):
    id: str
    description: str
    amount: float
    type: TransactionType
    date: datetime.date
    category: Optional[str] = None


class DeleteResponse(BaseModel):
    message: str
    id: str


class BalanceResponse(BaseModel):
    balance: float = Field(..., description="Total income minus total expenses")


class ErrorResponse(BaseModel):
    error: str
