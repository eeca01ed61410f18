"""
Vault Crypto
=============

Cipher / encoding / digest dispatch and the OpenSSL-compatible
passphrase envelope shared by every keyed cipher.
"""

from vault.crypto.dispatcher import (
    CryptoDispatcher,
    decrypt,
    encrypt,
    hash_bytes,
    hash_text,
)

__all__ = [
    "CryptoDispatcher",
    "decrypt",
    "encrypt",
    "hash_bytes",
    "hash_text",
]
