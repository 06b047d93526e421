# finance_tracker/core/exceptions.py
"""
Domain failures raised by the transaction service.

Routes translate these into HTTP responses; anything else that escapes
the service is treated as an unexpected server error.
"""


class TransactionError(Exception):
    """Base class for transaction failures"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransactionNotFoundError(TransactionError):
    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction not found with id: {transaction_id}")


class InvalidTransactionError(TransactionError):
    pass
