"""Error codes and exceptions raised by the generator and its I/O layer."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Closed set of generation failure codes."""

    #: Seed must be a positive integer.
    BAD_SEED = -1
    #: Requested node or arc count exceeds the configured limits.
    TOO_BIG = -2
    #: Inconsistent or invalid parameter settings.
    BAD_PARMS = -3
    #: Working arrays could not be allocated.
    ALLOCATION_FAILURE = -4

    @property
    def description(self) -> str:
        """Human-readable summary of the failure class."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorCode.BAD_SEED: "generator requires a positive random seed",
    ErrorCode.TOO_BIG: "problem too large for generator",
    ErrorCode.BAD_PARMS: "inconsistent parameter settings",
    ErrorCode.ALLOCATION_FAILURE: "memory allocation failure",
}


class GenerationError(Exception):
    """Base class for failures that abort network generation.

    Attributes:
        code: The ``ErrorCode`` identifying the failure class.
        reason: Optional short token naming the violated condition.
    """

    code: ErrorCode = ErrorCode.BAD_PARMS

    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.code.description}: {self.args[0]}"


class BadSeedError(GenerationError, ValueError):
    """Raised when the seed is not positive."""

    code = ErrorCode.BAD_SEED


class ProblemTooLargeError(GenerationError):
    """Raised when the instance does not fit the configured limits."""

    code = ErrorCode.TOO_BIG


class InvalidParametersError(GenerationError, ValueError):
    """Raised for inconsistent generation parameters."""

    code = ErrorCode.BAD_PARMS


class AllocationFailureError(GenerationError, MemoryError):
    """Raised when the working arenas cannot be allocated."""

    code = ErrorCode.ALLOCATION_FAILURE


class NetworkWriteError(OSError):
    """Raised when a generated network cannot be written to its target."""


class NetworkFormatError(ValueError):
    """Raised when a network file does not follow the line grammar.

    Attributes:
        line_number: 1-based line number of the offending line, if known.
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
