"""
Errors - Recoverable outcomes and fatal invariant violations.

Two categories:
1. Recoverable (validation, not found): returned as Outcome values and
   checked by the caller. The game continues.
2. Invariant violations: raised as InvariantViolation. These indicate a
   broken data model and are never used for rule validation.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable codes for recoverable errors."""
    EMPTY_DECK = "EMPTY_DECK"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    UNSUPPORTED = "UNSUPPORTED"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class InvariantViolation(RuntimeError):
    """The data model reached a state that should be impossible."""


@dataclass
class Outcome:
    """
    Result of a recoverable operation.

    `value` is set on success; `error` and `error_code` on failure.
    """
    ok: bool
    value: Any = None
    error: str | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def success(cls, value: Any = None) -> Outcome:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode = ErrorCode.VALIDATION) -> Outcome:
        return cls(ok=False, error=error, error_code=error_code)

    @property
    def not_found(self) -> bool:
        return self.error_code in (ErrorCode.NOT_FOUND, ErrorCode.INDEX_OUT_OF_RANGE)

    def __bool__(self) -> bool:
        return self.ok
