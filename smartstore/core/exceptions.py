# smartstore/core/exceptions.py
#
# Every failure the core raises carries a kind and a readable message.
# Callers (the HTTP layer, a UI) decide how to present them.

from typing import Optional


class SmartStoreError(Exception):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(SmartStoreError, ValueError):
    kind = "validation_error"


class InsufficientStockError(ValidationError):
    kind = "insufficient_stock"


class NotFoundError(SmartStoreError):
    kind = "not_found"


class ConstraintViolation(SmartStoreError):
    kind = "constraint_violation"


class TransactionFailure(SmartStoreError):
    kind = "transaction_failure"


class MigrationFailure(SmartStoreError):
    kind = "migration_failure"

    def __init__(self, message: str, version: Optional[int] = None):
        super().__init__(message)
        self.version = version
