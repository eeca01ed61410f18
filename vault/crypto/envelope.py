"""
Passphrase Envelope
====================

OpenSSL-compatible container used by every keyed cipher::

    base64( b"Salted__" || salt[8] || ciphertext )

Key and IV are derived from the UTF-8 passphrase and salt with OpenSSL's
``EVP_BytesToKey`` (MD5, one iteration). Block ciphers run in CBC mode
with PKCS#7 padding; RC4 variants use no IV. The output is readable by
``openssl enc -d -<cipher> -md md5 -a`` and by CryptoJS passphrase
decryption.

Key / IV geometry (bytes):

    =========  ====  ==  =====
    Cipher     Key   IV  Drop
    =========  ====  ==  =====
    AES        32    16  -
    DES         8     8  -
    TripleDES  24     8  -
    RC4        32     0  0
    RC4Drop    32     0  768
    =========  ====  ==  =====

References:
    - OpenSSL EVP_BytesToKey(3).
    - RFC 5652 Section 6.3 (PKCS#7 padding).
    - Mironov, I. (2002). (Not So) Random Shuffles of RC4. CRYPTO 2002.
"""

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from typing import Any, Callable, Optional

from Cryptodome.Cipher import AES, ARC4, DES, DES3
from Cryptodome.Random import get_random_bytes
from Cryptodome.Util.Padding import pad, unpad

from vault.core.models import CipherAlgorithm

SALT_MAGIC = b"Salted__"
SALT_SIZE = 8


@dataclass(frozen=True, slots=True)
class CipherSpec:
    """Geometry and constructor for one keyed cipher."""

    key_size: int
    iv_size: int
    block_size: int
    factory: Callable[[bytes, bytes], Any]


def _cbc(module: Any) -> Callable[[bytes, bytes], Any]:
    def build(key: bytes, iv: bytes) -> Any:
        return module.new(key, module.MODE_CBC, iv=iv)
    return build


def _arc4(drop: int) -> Callable[[bytes, bytes], Any]:
    def build(key: bytes, iv: bytes) -> Any:
        return ARC4.new(key, drop=drop)
    return build


_SPECS: dict[CipherAlgorithm, CipherSpec] = {
    CipherAlgorithm.AES: CipherSpec(32, 16, AES.block_size, _cbc(AES)),
    CipherAlgorithm.DES: CipherSpec(8, 8, DES.block_size, _cbc(DES)),
    CipherAlgorithm.TRIPLE_DES: CipherSpec(24, 8, DES3.block_size, _cbc(DES3)),
    CipherAlgorithm.RC4: CipherSpec(32, 0, 0, _arc4(0)),
    CipherAlgorithm.RC4_DROP: CipherSpec(32, 0, 0, _arc4(768)),
}


def spec_for(algorithm: CipherAlgorithm) -> CipherSpec:
    """Return the envelope geometry for a keyed cipher.

    Raises:
        KeyError: For ``Base64``, which has no envelope.
    """
    return _SPECS[algorithm]


# ===================================================================== #
#  Key derivation
# ===================================================================== #


def evp_bytes_to_key(
    passphrase: bytes,
    salt: Optional[bytes],
    key_size: int,
    iv_size: int,
) -> tuple[bytes, bytes]:
    """OpenSSL ``EVP_BytesToKey`` with MD5 and a single iteration.

    ``D_i = MD5(D_{i-1} || passphrase || salt)``, concatenated until
    ``key_size + iv_size`` bytes are available.
    """
    salt = salt or b""
    derived = b""
    block = b""
    while len(derived) < key_size + iv_size:
        block = hashlib.md5(block + passphrase + salt).digest()
        derived += block
    return derived[:key_size], derived[key_size:key_size + iv_size]


# ===================================================================== #
#  Seal / open
# ===================================================================== #


def seal(algorithm: CipherAlgorithm, plaintext: bytes, passphrase: str) -> str:
    """Encrypt *plaintext* and return the base64 envelope."""
    spec = spec_for(algorithm)
    salt = get_random_bytes(SALT_SIZE)
    key, iv = evp_bytes_to_key(passphrase.encode("utf-8"), salt, spec.key_size, spec.iv_size)
    cipher = spec.factory(key, iv)
    if spec.block_size:
        plaintext = pad(plaintext, spec.block_size)
    body = SALT_MAGIC + salt + cipher.encrypt(plaintext)
    return base64.b64encode(body).decode("ascii")


def open_envelope(algorithm: CipherAlgorithm, envelope: str, passphrase: str) -> bytes:
    """Decrypt a base64 envelope and return the raw plaintext bytes.

    Input without the ``Salted__`` header is treated as unsalted
    ciphertext, matching ``openssl enc -nosalt``.

    Raises:
        binascii.Error: Malformed base64.
        ValueError: Bad padding or ciphertext length for block ciphers.
    """
    spec = spec_for(algorithm)
    raw = base64.b64decode("".join(envelope.split()), validate=True)

    salt: Optional[bytes] = None
    if raw.startswith(SALT_MAGIC):
        salt = raw[len(SALT_MAGIC):len(SALT_MAGIC) + SALT_SIZE]
        if len(salt) != SALT_SIZE:
            raise ValueError("Truncated salt header")
        raw = raw[len(SALT_MAGIC) + SALT_SIZE:]

    key, iv = evp_bytes_to_key(passphrase.encode("utf-8"), salt, spec.key_size, spec.iv_size)
    cipher = spec.factory(key, iv)
    plaintext = cipher.decrypt(raw)
    if spec.block_size:
        plaintext = unpad(plaintext, spec.block_size)
    return plaintext

