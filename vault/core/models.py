"""
Vault Core Data Models
=======================

Enumerations and Pydantic models for the CyberVault crypto dispatcher,
password strength estimator and file hashing. All models are transient:
built per call, serialisable to JSON, and discarded once the caller has
rendered them.

The algorithm sets are closed enums. Each cipher variant knows whether it
needs a key; each digest variant knows whether it may be used on raw file
bytes. Unsupported names are rejected in :meth:`CipherAlgorithm.parse` /
:meth:`DigestAlgorithm.parse` before any primitive is touched.
"""

from __future__ import annotations

import enum
import re
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from vault.core.errors import ErrorKind, UnsupportedAlgorithm

_NAME_NOISE = re.compile(r"[\s_\-]")


def _normalise(name: str) -> str:
    return _NAME_NOISE.sub("", name).lower()


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class Operation(str, enum.Enum):
    """Operation requested from the dispatcher."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    HASH = "hash"


class CipherAlgorithm(str, enum.Enum):
    """Reversible algorithms available for encrypt / decrypt."""

    AES = "AES"
    DES = "DES"
    TRIPLE_DES = "TripleDES"
    RC4 = "RC4"
    RC4_DROP = "RC4Drop"
    BASE64 = "Base64"

    @property
    def requires_key(self) -> bool:
        """Every variant except the plain encoding needs a shared secret."""
        return self is not CipherAlgorithm.BASE64

    @property
    def label(self) -> str:
        return _CIPHER_LABELS[self]

    @classmethod
    def parse(cls, value: CipherAlgorithm | str, operation: str = "encryption") -> CipherAlgorithm:
        """Resolve *value* to a member, accepting names case-insensitively.

        Raises:
            UnsupportedAlgorithm: If *value* is not a cipher in this set.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = _normalise(value)
            for member in cls:
                if wanted in (_normalise(member.value), _normalise(member.name)):
                    return member
        raise UnsupportedAlgorithm(value, operation)


_CIPHER_LABELS: dict[CipherAlgorithm, str] = {
    CipherAlgorithm.AES: "AES-256",
    CipherAlgorithm.DES: "DES",
    CipherAlgorithm.TRIPLE_DES: "Triple DES",
    CipherAlgorithm.RC4: "RC4",
    CipherAlgorithm.RC4_DROP: "RC4 (drop 768)",
    CipherAlgorithm.BASE64: "Base64",
}


class DigestAlgorithm(str, enum.Enum):
    """One-way digest functions available for text and file hashing."""

    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"
    SHA3 = "SHA3"

    @property
    def supports_files(self) -> bool:
        """File hashing is limited to MD5 / SHA1 / SHA256 / SHA512."""
        return self is not DigestAlgorithm.SHA3

    @property
    def is_legacy(self) -> bool:
        """MD5 and SHA-1 have practical collision attacks."""
        return self in (DigestAlgorithm.MD5, DigestAlgorithm.SHA1)

    @property
    def label(self) -> str:
        return _DIGEST_LABELS[self]

    @classmethod
    def parse(cls, value: DigestAlgorithm | str, operation: str = "hash") -> DigestAlgorithm:
        """Resolve *value* to a member, accepting names case-insensitively.

        Raises:
            UnsupportedAlgorithm: If *value* is not a digest in this set.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = _normalise(value)
            for member in cls:
                if wanted == _normalise(member.value):
                    return member
        raise UnsupportedAlgorithm(value, operation)


_DIGEST_LABELS: dict[DigestAlgorithm, str] = {
    DigestAlgorithm.MD5: "MD5",
    DigestAlgorithm.SHA1: "SHA-1",
    DigestAlgorithm.SHA256: "SHA-256",
    DigestAlgorithm.SHA512: "SHA-512",
    DigestAlgorithm.SHA3: "SHA-3 (Keccak-512)",
}


class StrengthTier(str, enum.Enum):
    """Qualitative password strength bucket.

    Thresholds on the 0-8 score:
      - 0-2 : WEAK
      - 3-4 : FAIR
      - 5-6 : GOOD
      - 7-8 : STRONG
    """

    WEAK = "weak"
    FAIR = "fair"
    GOOD = "good"
    STRONG = "strong"

    @classmethod
    def from_score(cls, score: int) -> StrengthTier:
        if score <= 2:
            return cls.WEAK
        if score <= 4:
            return cls.FAIR
        if score <= 6:
            return cls.GOOD
        return cls.STRONG

    @property
    def crack_time(self) -> str:
        """Fixed illustrative label; not a computed time-to-crack."""
        return _CRACK_TIMES[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_CRACK_TIMES: dict[StrengthTier, str] = {
    StrengthTier.WEAK: "instantly",
    StrengthTier.FAIR: "3 weeks, 4 days",
    StrengthTier.GOOD: "5 years",
    StrengthTier.STRONG: "centuries",
}


# ===================================================================== #
#  Crypto Request / Result
# ===================================================================== #


class CryptoRequest(BaseModel):
    """A single dispatcher call expressed as data.

    Attributes:
        operation: encrypt, decrypt or hash.
        algorithm: Algorithm name; validated by the dispatcher, not here,
            so an unknown name becomes a ``CryptoResult`` error.
        text: Plaintext, ciphertext or text to hash.
        key: Shared secret for keyed ciphers. Ignored for ``Base64`` and
            for hashing.
    """

    operation: Operation
    algorithm: str
    text: str = ""
    key: Optional[str] = Field(default=None, repr=False)


class CryptoResult(BaseModel):
    """Normalised dispatcher outcome: exactly one of *output* / *error*."""

    operation: Operation
    algorithm: str
    output: Optional[str] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @model_validator(mode="after")
    def _one_outcome(self) -> CryptoResult:
        if (self.output is None) == (self.error is None):
            raise ValueError("CryptoResult needs exactly one of output or error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


# ===================================================================== #
#  Password Models
# ===================================================================== #


class StrengthAssessment(BaseModel):
    """Result of the heuristic password strength check.

    Attributes:
        score: Clamped heuristic score in [0, 8].
        tier: Bucket derived from *score*.
        feedback: Ordered advisory strings.
        crack_time: Fixed label attached to *tier*.
    """

    score: int = Field(default=0, ge=0, le=8)
    tier: StrengthTier = StrengthTier.WEAK
    feedback: list[str] = Field(default_factory=list)
    crack_time: str = "instantly"


class GeneratedPassword(BaseModel):
    """A freshly generated password together with its assessment."""

    password: str = Field(repr=False)
    length: int
    character_classes: list[str] = Field(default_factory=list)
    assessment: StrengthAssessment


# ===================================================================== #
#  File Hashing Models
# ===================================================================== #


class FileHashReport(BaseModel):
    """Digest of a file, optionally compared against an expected value.

    Attributes:
        file_name: Base name of the hashed file.
        file_size: Size in bytes.
        size_display: Human readable size (``"1.50 KB"``).
        algorithm: Digest used.
        digest: Lowercase hex digest.
        expected: Digest supplied for comparison, if any.
        matches: Case-insensitive comparison result, ``None`` when no
            expected digest was supplied.
    """

    file_name: str
    file_size: int = 0
    size_display: str = "0 B"
    algorithm: DigestAlgorithm
    digest: str
    expected: Optional[str] = None
    matches: Optional[bool] = None

    @property
    def virustotal_url(self) -> str:
        """Lookup URL for the digest; no request is ever made."""
        return f"https://www.virustotal.com/gui/file/{self.digest}"
