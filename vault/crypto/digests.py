"""
Digest Table
=============

Maps each :class:`~vault.core.models.DigestAlgorithm` to its ``hashlib``
constructor. ``SHA3`` is the original Keccak-512 submission (pre-FIPS
padding), the variant CryptoJS exposes as ``SHA3``; it comes from
pycryptodomex because hashlib only ships the FIPS 202 functions.

References:
    - FIPS 180-4 (2015). Secure Hash Standard.
    - Bertoni, G. et al. (2011). The Keccak reference, version 3.0.
    - RFC 1321 (1992). The MD5 Message-Digest Algorithm.
"""

from __future__ import annotations

import hashlib
from typing import Any, BinaryIO, Callable

from Cryptodome.Hash import keccak

from vault.core.models import DigestAlgorithm


def _keccak512(data: bytes) -> Any:
    return keccak.new(digest_bits=512, data=data)


_CONSTRUCTORS: dict[DigestAlgorithm, Callable[..., Any]] = {
    DigestAlgorithm.MD5: hashlib.md5,
    DigestAlgorithm.SHA1: hashlib.sha1,
    DigestAlgorithm.SHA256: hashlib.sha256,
    DigestAlgorithm.SHA512: hashlib.sha512,
    DigestAlgorithm.SHA3: _keccak512,
}

# Read size used when draining a binary stream into memory
_CHUNK_SIZE = 1 << 16


def digest_hex(algorithm: DigestAlgorithm, data: bytes) -> str:
    """Return the lowercase hex digest of *data*."""
    return _CONSTRUCTORS[algorithm](data).hexdigest()


def read_all(stream: BinaryIO) -> bytes:
    """Consume *stream* to EOF and return its full contents.

    The whole input is buffered before any digest is computed; a stream
    that raises part way through yields nothing.
    """
    chunks: list[bytes] = []
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        if not isinstance(chunk, (bytes, bytearray)):
            raise TypeError(f"Expected a binary stream, got {type(chunk).__name__}")
        chunks.append(bytes(chunk))
    return b"".join(chunks)
