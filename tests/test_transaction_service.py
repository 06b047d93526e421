"""Tests for the transaction service business rules."""

import asyncio
from datetime import date

import pytest

from finance_tracker.core.exceptions import InvalidTransactionError, TransactionNotFoundError
from finance_tracker.db.models.transaction_model import TransactionModel, TransactionType
from finance_tracker.services.transaction_service import TransactionService, validate_transaction


def make_txn(**overrides) -> TransactionModel:
    fields = {
        "description": "Groceries",
        "amount": 42.5,
        "type": TransactionType.EXPENSE,
        "date": date(2024, 3, 15),
        "category": "Food",
    }
    fields.update(overrides)
    return TransactionModel(**fields)


def test_create_then_get_returns_same_fields(service: TransactionService) -> None:
    candidate = make_txn()

    created = asyncio.run(service.create_transaction(candidate))
    fetched = asyncio.run(service.get_transaction_by_id(created.id))

    assert created.id
    assert fetched == candidate.model_copy(update={"id": created.id})


def test_create_ignores_client_supplied_id(service: TransactionService) -> None:
    created = asyncio.run(service.create_transaction(make_txn(id="client-chosen")))

    assert created.id != "client-chosen"


@pytest.mark.parametrize("amount", [0, -5, None, float("nan"), float("inf"), float("-inf")])
def test_create_rejects_non_positive_amount(service: TransactionService, amount) -> None:
    with pytest.raises(InvalidTransactionError, match="amount must be positive"):
        asyncio.run(service.create_transaction(make_txn(amount=amount)))


@pytest.mark.parametrize("description", ["", "   ", None])
def test_create_rejects_blank_description(service: TransactionService, description) -> None:
    with pytest.raises(InvalidTransactionError, match="description cannot be empty"):
        asyncio.run(service.create_transaction(make_txn(description=description)))


def test_validation_reports_first_failed_rule() -> None:
    txn = make_txn(description=" ", amount=-1, type=None, date=None)

    with pytest.raises(InvalidTransactionError) as exc_info:
        validate_transaction(txn)

    assert exc_info.value.message == "Transaction description cannot be empty"


def test_validation_requires_type_and_date() -> None:
    with pytest.raises(InvalidTransactionError, match="type is required"):
        validate_transaction(make_txn(type=None, date=None))
    with pytest.raises(InvalidTransactionError, match="date is required"):
        validate_transaction(make_txn(date=None))


def test_create_does_not_persist_invalid_transaction(service: TransactionService, repository) -> None:
    with pytest.raises(InvalidTransactionError):
        asyncio.run(service.create_transaction(make_txn(amount=0)))

    assert asyncio.run(repository.count()) == 0


def test_get_unknown_id_raises_not_found(service: TransactionService) -> None:
    with pytest.raises(TransactionNotFoundError) as exc_info:
        asyncio.run(service.get_transaction_by_id("missing"))

    assert exc_info.value.message == "Transaction not found with id: missing"


def test_update_overwrites_fields_and_keeps_id(service: TransactionService) -> None:
    created = asyncio.run(service.create_transaction(make_txn()))
    replacement = make_txn(
        description="Salary",
        amount=1000.0,
        type=TransactionType.INCOME,
        date=date(2024, 4, 1),
        category=None,
    )

    updated = asyncio.run(service.update_transaction(created.id, replacement))
    stored = asyncio.run(service.get_transaction_by_id(created.id))

    assert updated.id == created.id
    assert stored == replacement.model_copy(update={"id": created.id})


def test_update_unknown_id_is_not_found_even_when_invalid(service: TransactionService) -> None:
    with pytest.raises(TransactionNotFoundError):
        asyncio.run(service.update_transaction("missing", make_txn(description="")))


def test_invalid_update_leaves_stored_record_unchanged(service: TransactionService) -> None:
    created = asyncio.run(service.create_transaction(make_txn()))

    with pytest.raises(InvalidTransactionError, match="description cannot be empty"):
        asyncio.run(service.update_transaction(created.id, make_txn(description="")))

    assert asyncio.run(service.get_transaction_by_id(created.id)) == created


def test_delete_removes_transaction(service: TransactionService) -> None:
    created = asyncio.run(service.create_transaction(make_txn()))

    asyncio.run(service.delete_transaction(created.id))

    with pytest.raises(TransactionNotFoundError):
        asyncio.run(service.get_transaction_by_id(created.id))


def test_delete_unknown_id_raises_not_found(service: TransactionService) -> None:
    with pytest.raises(TransactionNotFoundError):
        asyncio.run(service.delete_transaction("missing"))


def test_balance_is_income_minus_expenses(service: TransactionService) -> None:
    asyncio.run(service.create_transaction(make_txn(amount=100, type=TransactionType.INCOME)))
    asyncio.run(service.create_transaction(make_txn(amount=40, type=TransactionType.EXPENSE)))

    assert asyncio.run(service.calculate_balance()) == 60.0


def test_balance_of_empty_store_is_zero(service: TransactionService) -> None:
    balance = asyncio.run(service.calculate_balance())

    assert balance == 0.0
    assert isinstance(balance, float)


def test_balance_can_go_negative(service: TransactionService) -> None:
    asyncio.run(service.create_transaction(make_txn(amount=10, type=TransactionType.INCOME)))
    asyncio.run(service.create_transaction(make_txn(amount=25.5, type=TransactionType.EXPENSE)))

    assert asyncio.run(service.calculate_balance()) == pytest.approx(-15.5)


def test_income_and_expense_listings(service: TransactionService) -> None:
    income = asyncio.run(service.create_transaction(make_txn(type=TransactionType.INCOME)))
    expense = asyncio.run(service.create_transaction(make_txn(type=TransactionType.EXPENSE)))

    assert [t.id for t in asyncio.run(service.get_income_transactions())] == [income.id]
    assert [t.id for t in asyncio.run(service.get_expense_transactions())] == [expense.id]
