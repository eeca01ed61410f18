"""
Vault Error Taxonomy
=====================

Typed failures raised by the crypto dispatcher and file hashing. Every
error carries an :class:`ErrorKind` so callers can branch on the kind
without string matching, and wraps the originating exception as
``__cause__`` where one exists.

None of these are retried anywhere: every operation is local and
deterministic.
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Machine-readable failure category."""

    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    MISSING_KEY = "missing_key"
    PRIMITIVE_FAILURE = "primitive_failure"
    READ_FAILURE = "read_failure"


class VaultError(Exception):
    """Base class for every failure surfaced by the vault core."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnsupportedAlgorithm(VaultError, ValueError):
    """The algorithm name is not in the supported set for the operation."""

    kind = ErrorKind.UNSUPPORTED_ALGORITHM

    def __init__(self, algorithm: object, operation: str) -> None:
        name = getattr(algorithm, "value", algorithm)
        super().__init__(f"Unsupported {operation} algorithm: {name!r}")
        self.algorithm = name
        self.operation = operation


class MissingKey(VaultError, ValueError):
    """A keyed cipher was invoked without a key and no default is configured."""

    kind = ErrorKind.MISSING_KEY

    def __init__(self, algorithm: object) -> None:
        name = getattr(algorithm, "value", algorithm)
        super().__init__(f"{name} requires a non-empty key")
        self.algorithm = name


class PrimitiveFailure(VaultError):
    """The underlying cipher, decoder or digest implementation raised."""

    kind = ErrorKind.PRIMITIVE_FAILURE


class ReadFailure(VaultError):
    """The byte source for hashing could not be fully consumed."""

    kind = ErrorKind.READ_FAILURE
