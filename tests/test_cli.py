"""Tests for the Click command-line interface."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vault.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _json(result) -> dict:
    return json.loads(result.stdout)


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_hash_json(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-o", "json", "hash", "abc", "-a", "md5"])
    assert result.exit_code == 0
    report = _json(result)
    assert report["metadata"]["output"] == "900150983cd24fb0d6963f7d28e17f72"
    assert report["summary"]["highest_severity"] == "MEDIUM"


def test_encrypt_decrypt_round_trip(runner: CliRunner) -> None:
    sealed = runner.invoke(cli, ["-o", "json", "encrypt", "attack at dawn", "-a", "AES", "-k", "pw"])
    assert sealed.exit_code == 0
    token = _json(sealed)["metadata"]["output"]

    opened = runner.invoke(cli, ["-o", "json", "decrypt", token, "-a", "aes", "-k", "pw"])
    assert opened.exit_code == 0
    assert _json(opened)["metadata"]["output"] == "attack at dawn"


def test_encrypt_without_key_fails(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-o", "json", "encrypt", "text"])
    assert result.exit_code == 1


def test_unknown_algorithm_rejected_by_choice(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["encrypt", "text", "-a", "Rabbit", "-k", "k"])
    assert result.exit_code == 2


def test_console_output(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-q", "encrypt", "secret", "-a", "Base64"])
    assert result.exit_code == 0
    assert "c2VjcmV0" in result.output


def test_password_json(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-o", "json", "password", "abcdefgH1!"])
    assert result.exit_code == 0
    report = _json(result)
    assert report["metadata"]["score"] == 5
    assert report["metadata"]["tier"] == "good"


def test_generate_json(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-o", "json", "generate", "-l", "20", "--no-symbols"])
    assert result.exit_code == 0
    generated = _json(result)
    assert len(generated["password"]) == 20
    assert "symbols" not in generated["character_classes"]


def test_generate_bad_length(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-o", "json", "generate", "-l", "100"])
    assert result.exit_code == 2


def test_hash_file_match(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_bytes(b"hello")
    digest = hashlib.sha256(b"hello").hexdigest()

    result = runner.invoke(cli, ["-o", "json", "hash-file", str(target), "-e", digest])
    assert result.exit_code == 0
    assert _json(result)["metadata"]["matches"] is True


def test_hash_file_mismatch(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_bytes(b"hello")
    result = runner.invoke(cli, ["-o", "json", "hash-file", str(target), "-e", "00"])
    assert result.exit_code == 2


def test_hash_file_missing(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["-o", "json", "hash-file", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_hash_file_rejects_sha3_choice(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_bytes(b"hello")
    result = runner.invoke(cli, ["hash-file", str(target), "-a", "SHA3"])
    assert result.exit_code == 2


def test_json_report_file(runner: CliRunner, tmp_path: Path) -> None:
    out = tmp_path / "reports" / "hash.json"
    result = runner.invoke(cli, ["-o", "json", "-f", str(out), "hash", "abc"])
    assert result.exit_code == 0
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["report_metadata"]["tool"] == "vault"
    assert report["metadata"]["algorithm"] == "SHA256"


def test_config_option(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "config.toml"
    config.write_text('[vault]\ndefault_hash_algorithm = "SHA1"\n', encoding="utf-8")
    result = runner.invoke(cli, ["-c", str(config), "-o", "json", "hash", "abc"])
    assert result.exit_code == 0
    assert _json(result)["metadata"]["output"] == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_generate_json_report_file(runner: CliRunner, tmp_path: Path) -> None:
    out = tmp_path / "generated" / "password.json"
    result = runner.invoke(cli, ["-o", "json", "-f", str(out), "generate", "-l", "12"])
    assert result.exit_code == 0
    generated = json.loads(out.read_text(encoding="utf-8"))
    assert len(generated["password"]) == 12
    assert generated["password"] not in result.stdout
