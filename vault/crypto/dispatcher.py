"""
Crypto Dispatcher
==================

Single entry point per operation (encrypt, decrypt, hash text, hash
bytes) over the closed algorithm sets in :mod:`vault.core.models`.

Every call follows the same order:

1. Resolve the algorithm for the requested operation; anything outside
   the compatibility table raises :class:`UnsupportedAlgorithm`.
2. Empty text short-circuits to ``""`` without touching a primitive.
3. Keyed ciphers need a non-empty key; with no configured fallback the
   call raises :class:`MissingKey`.
4. Any exception from the primitive (bad base64, bad padding, invalid
   UTF-8) is re-raised as :class:`PrimitiveFailure` with the original
   as ``__cause__``.

Decrypting with the wrong key is not guaranteed to fail: stream ciphers
and lucky padding can yield garbage text instead. It never yields the
original plaintext.

Compatibility table::

    Algorithm               Encrypt/Decrypt   Hash text   Hash bytes
    AES, DES, TripleDES     keyed             -           -
    RC4, RC4Drop            keyed             -           -
    Base64                  no key            -           -
    MD5/SHA1/SHA256/SHA512  -                 yes         yes
    SHA3                    -                 yes         -

Usage::

    dispatcher = CryptoDispatcher()
    token = dispatcher.encrypt("attack at dawn", "AES", "hunter2")
    dispatcher.decrypt(token, CipherAlgorithm.AES, "hunter2")
    dispatcher.hash_text("abc", "SHA256")
"""

from __future__ import annotations

import base64
from typing import BinaryIO, Optional, Union

from vault.core.errors import (
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
    Operation,
)
from vault.crypto import envelope
from vault.crypto.digests import digest_hex, read_all

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO]


class CryptoDispatcher:
    """Validates, dispatches and normalises cryptographic operations.

    Args:
        default_key: Legacy fallback passphrase used when a keyed cipher is
            called without a key. ``None`` (the default) makes a missing
            key an error.
    """

    def __init__(self, default_key: Optional[str] = None) -> None:
        self._default_key = default_key or None

    # ------------------------------------------------------------------ #
    #  Encrypt / decrypt
    # ------------------------------------------------------------------ #

    def encrypt(
        self,
        text: str,
        algorithm: CipherAlgorithm | str,
        key: Optional[str] = None,
    ) -> str:
        """Encrypt (or encode) *text* and return a text representation.

        Raises:
            UnsupportedAlgorithm: *algorithm* is not a cipher.
            MissingKey: Keyed cipher without key or configured default.
            PrimitiveFailure: The cipher implementation raised.
        """
        algo = CipherAlgorithm.parse(algorithm, "encryption")
        if not text:
            return ""
        passphrase = self._resolve_key(algo, key)

        try:
            if algo is CipherAlgorithm.BASE64:
                return base64.b64encode(text.encode("utf-8")).decode("ascii")
            return envelope.seal(algo, text.encode("utf-8"), passphrase)
        except Exception as exc:
            raise PrimitiveFailure(f"{algo.value} encryption failed: {exc}") from exc

    def decrypt(
        self,
        text: str,
        algorithm: CipherAlgorithm | str,
        key: Optional[str] = None,
    ) -> str:
        """Decrypt (or decode) *text* produced by :meth:`encrypt`.

        Raises:
            UnsupportedAlgorithm: *algorithm* is not a cipher.
            MissingKey: Keyed cipher without key or configured default.
            PrimitiveFailure: Malformed input, bad padding or non-UTF-8
                plaintext (typically a wrong key).
        """
        algo = CipherAlgorithm.parse(algorithm, "decryption")
        if not text:
            return ""
        passphrase = self._resolve_key(algo, key)

        try:
            if algo is CipherAlgorithm.BASE64:
                raw = base64.b64decode("".join(text.split()), validate=True)
            else:
                raw = envelope.open_envelope(algo, text, passphrase)
            return raw.decode("utf-8")
        except Exception as exc:
            raise PrimitiveFailure(f"{algo.value} decryption failed: {exc}") from exc

    # ------------------------------------------------------------------ #
    #  Hashing
    # ------------------------------------------------------------------ #

    def hash_text(self, text: str, algorithm: DigestAlgorithm | str) -> str:
        """Return the hex digest of the UTF-8 encoding of *text*.

        Raises:
            UnsupportedAlgorithm: *algorithm* is not a digest.
        """
        algo = DigestAlgorithm.parse(algorithm, "hash")
        if not text:
            return ""
        return digest_hex(algo, text.encode("utf-8"))

    def hash_bytes(self, data: ByteSource, algorithm: DigestAlgorithm | str) -> str:
        """Return the hex digest of raw bytes or of a binary stream.

        Streams are read to EOF before hashing. Empty input is hashed
        (digest of the empty message) rather than short-circuited.

        Raises:
            UnsupportedAlgorithm: *algorithm* is not a file digest.
            ReadFailure: The stream could not be fully read.
        """
        algo = DigestAlgorithm.parse(algorithm, "file hash")
        if not algo.supports_files:
            raise UnsupportedAlgorithm(algo, "file hash")

        if isinstance(data, (bytes, bytearray, memoryview)):
            payload = bytes(data)
        else:
            try:
                payload = read_all(data)
            except (OSError, ValueError, TypeError, AttributeError) as exc:
                raise ReadFailure(f"Failed to read input: {exc}") from exc
        return digest_hex(algo, payload)

    # ------------------------------------------------------------------ #
    #  Request / result form
    # ------------------------------------------------------------------ #

    def process(self, request: CryptoRequest) -> CryptoResult:
        """Run a :class:`CryptoRequest` and fold any failure into the result.

        This is the only method that does not raise :class:`VaultError`.
        """
        try:
            if request.operation is Operation.ENCRYPT:
                output = self.encrypt(request.text, request.algorithm, request.key)
            elif request.operation is Operation.DECRYPT:
                output = self.decrypt(request.text, request.algorithm, request.key)
            else:
                output = self.hash_text(request.text, request.algorithm)
        except VaultError as exc:
            return CryptoResult(
                operation=request.operation,
                algorithm=request.algorithm,
                error=exc.kind,
                message=exc.message,
            )
        return CryptoResult(
            operation=request.operation,
            algorithm=request.algorithm,
            output=output,
        )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _resolve_key(self, algorithm: CipherAlgorithm, key: Optional[str]) -> str:
        if not algorithm.requires_key:
            return ""
        if key:
            return key
        if self._default_key:
            return self._default_key
        raise MissingKey(algorithm)


# ========================= Module-level convenience ========================

_STRICT = CryptoDispatcher()


def encrypt(text: str, algorithm: CipherAlgorithm | str, key: Optional[str] = None) -> str:
    """Encrypt with a strict dispatcher (no default key)."""
    return _STRICT.encrypt(text, algorithm, key)


def decrypt(text: str, algorithm: CipherAlgorithm | str, key: Optional[str] = None) -> str:
    """Decrypt with a strict dispatcher (no default key)."""
    return _STRICT.decrypt(text, algorithm, key)


def hash_text(text: str, algorithm: DigestAlgorithm | str) -> str:
    """Hex digest of *text*."""
    return _STRICT.hash_text(text, algorithm)


def hash_bytes(data: ByteSource, algorithm: DigestAlgorithm | str) -> str:
    """Hex digest of raw bytes or a binary stream."""
    return _STRICT.hash_bytes(data, algorithm)
