"""Tests for the passphrase envelope and key derivation."""

from __future__ import annotations

import base64
import hashlib

import pytest

from vault.core.models import CipherAlgorithm
from vault.crypto.envelope import (
    SALT_MAGIC,
    evp_bytes_to_key,
    open_envelope,
    seal,
    spec_for,
)


def test_evp_first_block_is_md5_of_passphrase_and_salt() -> None:
    key, iv = evp_bytes_to_key(b"pw", b"saltsalt", 16, 0)
    assert key == hashlib.md5(b"pwsaltsalt").digest()
    assert iv == b""


def test_evp_chains_blocks() -> None:
    key, iv = evp_bytes_to_key(b"pw", b"saltsalt", 32, 16)
    d1 = hashlib.md5(b"pwsaltsalt").digest()
    d2 = hashlib.md5(d1 + b"pwsaltsalt").digest()
    d3 = hashlib.md5(d2 + b"pwsaltsalt").digest()
    assert key == d1 + d2
    assert iv == d3


def test_evp_without_salt() -> None:
    key, _ = evp_bytes_to_key(b"pw", None, 8, 8)
    assert key == hashlib.md5(b"pw").digest()[:8]


@pytest.mark.parametrize(
    "algorithm,key_size,iv_size",
    [
        (CipherAlgorithm.AES, 32, 16),
        (CipherAlgorithm.DES, 8, 8),
        (CipherAlgorithm.TRIPLE_DES, 24, 8),
        (CipherAlgorithm.RC4, 32, 0),
        (CipherAlgorithm.RC4_DROP, 32, 0),
    ],
)
def test_cipher_geometry(algorithm: CipherAlgorithm, key_size: int, iv_size: int) -> None:
    spec = spec_for(algorithm)
    assert spec.key_size == key_size
    assert spec.iv_size == iv_size


def test_base64_has_no_envelope() -> None:
    with pytest.raises(KeyError):
        spec_for(CipherAlgorithm.BASE64)


def test_seal_layout() -> None:
    raw = base64.b64decode(seal(CipherAlgorithm.AES, b"sixteen byte msg", "pw"))
    assert raw[:8] == SALT_MAGIC
    # salt + two blocks (full padding block appended)
    assert len(raw) == 8 + 8 + 32


def test_stream_cipher_body_matches_plaintext_length() -> None:
    raw = base64.b64decode(seal(CipherAlgorithm.RC4, b"12345", "pw"))
    assert len(raw) == 16 + 5


def test_open_tolerates_line_breaks() -> None:
    token = seal(CipherAlgorithm.TRIPLE_DES, b"wrapped output " * 8, "pw")
    wrapped = "\n".join(token[i:i + 64] for i in range(0, len(token), 64))
    assert open_envelope(CipherAlgorithm.TRIPLE_DES, wrapped, "pw") == b"wrapped output " * 8


def test_truncated_salt_header() -> None:
    token = base64.b64encode(SALT_MAGIC + b"abc").decode()
    with pytest.raises(ValueError):
        open_envelope(CipherAlgorithm.AES, token, "pw")
