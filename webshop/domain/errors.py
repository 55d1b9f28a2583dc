from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    INVALID_STATE = "invalid_state"
    DUPLICATE_ITEM = "duplicate_item"
    NOT_FOUND = "not_found"


class DomainError(Exception):
    """Base class for guard-clause failures raised by entities and the Order aggregate."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    kind = ErrorKind.VALIDATION


class InvalidStateError(DomainError):
    kind = ErrorKind.INVALID_STATE


class DuplicateItemError(DomainError):
    kind = ErrorKind.DUPLICATE_ITEM


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
