"""Tests for the vault engine facade."""

from __future__ import annotations

import asyncio
import hashlib
from pathlib import Path

import pytest

from shared.config import ToolkitConfig
from shared.models import Severity
from vault.core.engine import VaultEngine, format_size
from vault.core.errors import MissingKey, ReadFailure, UnsupportedAlgorithm
from vault.core.models import CryptoRequest, DigestAlgorithm, Operation, StrengthTier


def _titles(result) -> list[str]:
    return [f.title for f in result.findings]


# ===================================================================== #
#  Defaults and crypto
# ===================================================================== #


def test_defaults_come_from_config(engine: VaultEngine) -> None:
    token = engine.encrypt("hello", key="k")
    assert engine.decrypt(token, "AES", "k") == "hello"
    assert engine.hash_text("abc") == hashlib.sha256(b"abc").hexdigest()
    assert engine.hash_bytes(b"") == hashlib.sha256(b"").hexdigest()


def test_configured_default_algorithm() -> None:
    config = ToolkitConfig()
    config.vault.default_hash_algorithm = "MD5"
    engine = VaultEngine(config)
    assert engine.hash_text("abc") == "900150983cd24fb0d6963f7d28e17f72"


def test_missing_key_propagates(engine: VaultEngine) -> None:
    with pytest.raises(MissingKey):
        engine.encrypt("hello")


def test_legacy_key_from_config() -> None:
    config = ToolkitConfig()
    config.vault.legacy_default_key = "defaultKey"
    engine = VaultEngine(config)
    token = engine.encrypt("hello")
    assert engine.decrypt(token) == "hello"


def test_process_does_not_raise(engine: VaultEngine) -> None:
    result = engine.process(CryptoRequest(operation=Operation.ENCRYPT, algorithm="Rabbit", text="x", key="k"))
    assert not result.ok


# ===================================================================== #
#  File hashing
# ===================================================================== #


def test_hash_file(engine: VaultEngine, tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    target.write_bytes(b"abc" * 1000)

    report = asyncio.run(engine.hash_file(target))
    assert report.file_name == "data.bin"
    assert report.file_size == 3000
    assert report.size_display == "2.93 KB"
    assert report.algorithm is DigestAlgorithm.SHA256
    assert report.digest == hashlib.sha256(b"abc" * 1000).hexdigest()
    assert report.matches is None
    assert report.virustotal_url.endswith(report.digest)


def test_hash_empty_file(engine: VaultEngine, tmp_path: Path) -> None:
    target = tmp_path / "empty"
    target.write_bytes(b"")
    report = asyncio.run(engine.hash_file(target, "MD5"))
    assert report.digest == "d41d8cd98f00b204e9800998ecf8427e"
    assert report.size_display == "0 B"


def test_expected_digest_comparison(engine: VaultEngine, tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    target.write_bytes(b"abc")
    digest = hashlib.sha1(b"abc").hexdigest()

    match = asyncio.run(engine.hash_file(target, "SHA1", f"  {digest.upper()} "))
    assert match.matches is True
    assert match.expected == digest.upper()

    mismatch = asyncio.run(engine.hash_file(target, "SHA1", "00" * 20))
    assert mismatch.matches is False

    blank = asyncio.run(engine.hash_file(target, "SHA1", "   "))
    assert blank.matches is None


def test_hash_file_rejects_sha3(engine: VaultEngine, tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    target.write_bytes(b"abc")
    with pytest.raises(UnsupportedAlgorithm):
        asyncio.run(engine.hash_file(target, "SHA3"))


def test_hash_missing_file(engine: VaultEngine, tmp_path: Path) -> None:
    with pytest.raises(ReadFailure):
        asyncio.run(engine.hash_file(tmp_path / "nope.bin"))


def test_hash_oversized_file(tmp_path: Path) -> None:
    config = ToolkitConfig()
    config.vault.max_file_size = 10
    engine = VaultEngine(config)
    target = tmp_path / "big.bin"
    target.write_bytes(b"x" * 11)
    with pytest.raises(ReadFailure):
        asyncio.run(engine.hash_file(target))

    target.write_bytes(b"x" * 10)
    assert asyncio.run(engine.hash_file(target)).file_size == 10


@pytest.mark.parametrize(
    "size,expected",
    [(0, "0 B"), (1023, "1023 B"), (1024, "1.00 KB"), (1536, "1.50 KB"),
     (1048576, "1.00 MB"), (5 * 1024 ** 3, "5.00 GB")],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


# ===================================================================== #
#  Passwords
# ===================================================================== #


def test_generate_password_defaults(engine: VaultEngine) -> None:
    generated = engine.generate_password()
    assert generated.length == 16
    assert generated.character_classes == ["uppercase", "lowercase", "numbers", "symbols"]


def test_generate_password_respects_config_range(engine: VaultEngine) -> None:
    with pytest.raises(ValueError):
        engine.generate_password(length=64)


def test_assess_password(engine: VaultEngine) -> None:
    assert engine.assess_password("abcdefgH1!").tier is StrengthTier.GOOD


# ===================================================================== #
#  ScanResult wrappers
# ===================================================================== #


def test_crypto_report_success(engine: VaultEngine) -> None:
    result = engine.crypto_report(
        CryptoRequest(operation=Operation.HASH, algorithm="SHA256", text="abc")
    )
    assert result.metadata["output"] == hashlib.sha256(b"abc").hexdigest()
    assert result.findings == []
    assert result.end_time is not None


def test_crypto_report_flags_weak_choices(engine: VaultEngine) -> None:
    des = engine.crypto_report(
        CryptoRequest(operation=Operation.ENCRYPT, algorithm="DES", text="x", key="k")
    )
    assert "Legacy Cipher: DES" in _titles(des)
    assert des.highest_severity is Severity.HIGH

    encoded = engine.crypto_report(
        CryptoRequest(operation=Operation.ENCRYPT, algorithm="Base64", text="x")
    )
    assert "Encoding Is Not Encryption" in _titles(encoded)

    md5 = engine.crypto_report(
        CryptoRequest(operation=Operation.HASH, algorithm="MD5", text="x")
    )
    assert "Legacy Digest: MD5" in _titles(md5)


def test_crypto_report_failure(engine: VaultEngine) -> None:
    result = engine.crypto_report(
        CryptoRequest(operation=Operation.ENCRYPT, algorithm="AES", text="x")
    )
    assert result.metadata["error"] == "missing_key"
    assert result.metadata["output"] is None
    assert _titles(result) == ["Encrypt failed"]


def test_crypto_report_flags_default_key() -> None:
    config = ToolkitConfig()
    config.vault.legacy_default_key = "defaultKey"
    engine = VaultEngine(config)
    result = engine.crypto_report(
        CryptoRequest(operation=Operation.ENCRYPT, algorithm="AES", text="x")
    )
    assert "Built-in Default Key Used" in _titles(result)


def test_password_report(engine: VaultEngine) -> None:
    result = engine.password_report("abcdefgh")
    assert result.metadata["score"] == 2
    assert result.findings[0].title == "Password Strength: Weak"
    assert result.findings[0].severity is Severity.HIGH
    assert [f.description for f in result.findings[1:]] == result.metadata["feedback"]


def test_file_report_mismatch(engine: VaultEngine, tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    target.write_bytes(b"abc")
    result = asyncio.run(engine.file_report(target, "MD5", "deadbeef"))
    assert result.metadata["matches"] is False
    assert "Digest Mismatch" in _titles(result)
    assert "Legacy Digest: MD5" in _titles(result)


def test_file_report_error(engine: VaultEngine, tmp_path: Path) -> None:
    result = asyncio.run(engine.file_report(tmp_path / "missing.bin"))
    assert result.metadata == {}
    assert _titles(result) == ["File Hashing Error"]
