"""
Vault Core Module
==================

Data models, error taxonomy and the central engine for CyberVault.
The engine is imported from :mod:`vault.core.engine` directly.
"""

from vault.core.errors import (
    ErrorKind,
    MissingKey,
    PrimitiveFailure,
    ReadFailure,
    UnsupportedAlgorithm,
    VaultError,
)
from vault.core.models import (
    CipherAlgorithm,
    CryptoRequest,
    CryptoResult,
    DigestAlgorithm,
    FileHashReport,
    GeneratedPassword,
    Operation,
    StrengthAssessment,
    StrengthTier,
)

__all__ = [
    "CipherAlgorithm",
    "CryptoRequest",
    "CryptoResult",
    "DigestAlgorithm",
    "ErrorKind",
    "FileHashReport",
    "GeneratedPassword",
    "MissingKey",
    "Operation",
    "PrimitiveFailure",
    "ReadFailure",
    "StrengthAssessment",
    "StrengthTier",
    "UnsupportedAlgorithm",
    "VaultError",
]
