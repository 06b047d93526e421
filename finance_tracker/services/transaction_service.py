# finance_tracker/services/transaction_service.py
"""
Transaction Service.

Owns the business rules for transactions: field validation, existence
checks and balance aggregation.  Storage is reached only through the
repository handed to the constructor.
"""

import logging
import math
from typing import List

from finance_tracker.core.exceptions import InvalidTransactionError, TransactionNotFoundError
from finance_tracker.db.models.transaction_model import TransactionModel, TransactionType
from finance_tracker.repositories.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)


def validate_transaction(txn: TransactionModel) -> None:
    """
    Check the business rules shared by create and update.

    Rules are checked in order and the first failure is raised.

    Raises:
        InvalidTransactionError: naming the violated rule
    """
    if txn.description is None or not txn.description.strip():
        raise InvalidTransactionError("Transaction description cannot be empty")

    if txn.amount is None or not math.isfinite(txn.amount) or not txn.amount > 0:
        raise InvalidTransactionError("Transaction amount must be positive")

    if txn.type is None:
        raise InvalidTransactionError("Transaction type is required")

    if txn.date is None:
        raise InvalidTransactionError("Transaction date is required")


class TransactionService:
    def __init__(self, repository: TransactionRepository):
        self.repository = repository

    async def get_all_transactions(self) -> List[TransactionModel]:
        return await self.repository.find_all()

    async def get_transaction_by_id(self, transaction_id: str) -> TransactionModel:
        txn = await self.repository.find_by_id(transaction_id)
        if txn is None:
            logger.debug("Transaction %s not found", transaction_id)
            raise TransactionNotFoundError(transaction_id)
        return txn

    async def create_transaction(self, candidate: TransactionModel) -> TransactionModel:
        """Validate ``candidate`` and persist it; storage assigns the id."""
        try:
            validate_transaction(candidate)
        except InvalidTransactionError as e:
            logger.info("Rejected new transaction: %s", e.message)
            raise

        created = await self.repository.save(candidate.model_copy(update={"id": None}))
        logger.info("Created transaction %s", created.id)
        return created

    async def update_transaction(self, transaction_id: str, candidate: TransactionModel) -> TransactionModel:
        """
        Overwrite every field but the id of an existing transaction.

        Existence is checked before validation, so an unknown id always
        fails with TransactionNotFoundError.  The stored record is left
        untouched when the merged record is invalid.

        Note: the read and the write are separate storage calls; two
        concurrent updates of the same id resolve as last writer wins.
        """
        existing = await self.get_transaction_by_id(transaction_id)

        merged = existing.model_copy(update={
            "description": candidate.description,
            "amount": candidate.amount,
            "type": candidate.type,
            "date": candidate.date,
            "category": candidate.category,
        })

        try:
            validate_transaction(merged)
        except InvalidTransactionError as e:
            logger.info("Rejected update of transaction %s: %s", transaction_id, e.message)
            raise

        updated = await self.repository.save(merged)
        logger.info("Updated transaction %s", transaction_id)
        return updated

    async def delete_transaction(self, transaction_id: str) -> None:
        if not await self.repository.exists_by_id(transaction_id):
            raise TransactionNotFoundError(transaction_id)
        await self.repository.delete_by_id(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    async def calculate_balance(self) -> float:
        """
        Total income minus total expenses over every stored transaction.

        Plain float arithmetic: sums such as 0.1 + 0.2 carry the usual
        binary rounding error.  No currency rounding is applied.
        """
        transactions = await self.repository.find_all()

        total_income = sum(t.amount for t in transactions if t.type == TransactionType.INCOME)
        total_expenses = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)

        return float(total_income - total_expenses)

    async def get_income_transactions(self) -> List[TransactionModel]:
        return await self.repository.find_by_type(TransactionType.INCOME)

    async def get_expense_transactions(self) -> List[TransactionModel]:
        return await self.repository.find_by_type(TransactionType.EXPENSE)
