"""
Exception hierarchy for the stencil transform stages.

Every error is a local validation failure raised before any output buffer is
written, so callers never observe a half-transformed field.
"""
from __future__ import annotations


class TeaLeafError(ValueError):
    """Base exception for transform and pipeline validation."""

    def __init__(self, message: str, code: str | None = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class InvalidLength(TeaLeafError):
    """Raised when a transform length is unusable at the call site."""

    def __init__(self, length: int, message: str | None = None):
        super().__init__(
            message or f"invalid transform length {length}",
            code="INVALID_LENGTH",
            details={"length": length},
        )
        self.length = length


class InvalidCutoff(TeaLeafError):
    """Raised when a frequency cutoff falls outside [0, N/2]."""

    def __init__(self, cutoff, size: int):
        super().__init__(
            f"cutoff {cutoff!r} outside [0, {size}/2]",
            code="INVALID_CUTOFF",
            details={"cutoff": cutoff, "size": size},
        )
        self.cutoff = cutoff
        self.size = size


class DimensionMismatch(TeaLeafError):
    """Raised when a field's shape disagrees with the size a stage expects."""

    def __init__(self, expected, actual):
        super().__init__(
            f"expected field of shape {expected}, got {actual}",
            code="DIMENSION_MISMATCH",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class UnknownGenerator(TeaLeafError):
    """Raised when a noise source name is not in the generator registry."""

    def __init__(self, name, choices):
        super().__init__(
            f"unknown noise generator {name!r}; choose from {sorted(choices)}",
            code="UNKNOWN_GENERATOR",
            details={"name": name, "choices": sorted(choices)},
        )
        self.name = name
