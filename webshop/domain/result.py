from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from webshop.domain.errors import DomainError, ErrorKind

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """
    Outcome of a use case.

    Expected failures (bad input, illegal state transitions, missing rows)
    travel back to the caller as a failed Result instead of an exception.
    """

    is_success: bool
    value: T | None = None
    errors: list[str] = field(default_factory=list)
    kind: ErrorKind | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(is_success=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, *errors: str) -> Result[T]:
        return cls(is_success=False, errors=list(errors), kind=kind)

    @classmethod
    def from_error(cls, error: DomainError) -> Result[T]:
        return cls.failure(error.kind, error.message)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def error(self) -> str:
        return "; ".join(self.errors)
