import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from finance_tracker.core.exceptions import InvalidTransactionError, TransactionNotFoundError
from finance_tracker.schemas.transaction_schema import (
    BalanceResponse,
    DeleteResponse,
    ErrorResponse,
    TransactionCreate,
    TransactionResponse,
)
from finance_tracker.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


def get_transaction_service(request: Request) -> TransactionService:
    return request.app.state.transaction_service


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("", response_model=List[TransactionResponse])
async def get_all_transactions(service: TransactionService = Depends(get_transaction_service)):
    return await service.get_all_transactions()


# Registered before "/{transaction_id}" so "balance" is never taken as an id
@router.get("/balance", response_model=BalanceResponse)
async def get_balance(service: TransactionService = Depends(get_transaction_service)):
    balance = await service.calculate_balance()
    return {"balance": balance}


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={404: {"description": "Transaction not found (empty body)"}},
)
async def get_transaction_by_id(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.get_transaction_by_id(transaction_id)
    except TransactionNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_transaction(
    data: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.create_transaction(data.to_model())
    except InvalidTransactionError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, e.message)
    except Exception as e:
        logger.exception("Failed to create transaction")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to create transaction: {e}"
        )


@router.put(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def update_transaction(
    transaction_id: str,
    data: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.update_transaction(transaction_id, data.to_model())
    except InvalidTransactionError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, e.message)
    except TransactionNotFoundError as e:
        return error_response(status.HTTP_404_NOT_FOUND, e.message)
    except Exception as e:
        logger.exception("Failed to update transaction %s", transaction_id)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to update transaction: {e}"
        )


@router.delete(
    "/{transaction_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_transaction(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        await service.delete_transaction(transaction_id)
    except TransactionNotFoundError as e:
        return error_response(status.HTTP_404_NOT_FOUND, e.message)

    return {"message": "Transaction deleted successfully", "id": transaction_id}
