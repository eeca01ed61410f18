"""Tests for the structured logger."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from shared.config import ToolkitConfig
from shared.logger import ToolkitLogger, redact


def test_redact_masks_secret_fields() -> None:
    assert redact({"key": "k1", "Password": "p", "algorithm": "AES"}) == {
        "key": "[redacted]",
        "Password": "[redacted]",
        "algorithm": "AES",
    }


def test_json_file_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "vault.log"
    log = ToolkitLogger(
        "test.json", log_level="DEBUG", log_file=log_file, json_logs=True, console_output=False,
    )
    with log.operation("encrypt"):
        log.info("Encrypting %d chars", 5, algorithm="AES", key="hunter2")
    for handler in log.underlying.handlers:
        handler.flush()

    entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
    assert entry["message"] == "Encrypting 5 chars"
    assert entry["operation"] == "encrypt"
    assert entry["component"] == "test.json"
    assert entry["fields"] == {"algorithm": "AES", "key": "[redacted]"}
    assert "hunter2" not in log_file.read_text(encoding="utf-8")


def test_level_filtering(tmp_path: Path) -> None:
    log_file = tmp_path / "vault.log"
    log = ToolkitLogger("test.level", log_level="WARNING", log_file=log_file, console_output=False)
    log.debug("hidden")
    log.warning("shown")
    for handler in log.underlying.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "shown" in text
    assert "hidden" not in text


def test_unknown_level_falls_back_to_warning() -> None:
    log = ToolkitLogger("test.unknown", log_level="chatty", console_output=False)
    assert log.underlying.level == logging.WARNING


def test_reinstantiation_replaces_handlers(tmp_path: Path) -> None:
    ToolkitLogger("test.dupe", log_file=tmp_path / "a.log", console_output=False)
    log = ToolkitLogger("test.dupe", log_file=tmp_path / "b.log", console_output=False)
    assert len(log.underlying.handlers) == 1


def test_from_config_debug() -> None:
    config = ToolkitConfig()
    config.global_settings.debug = True
    log = ToolkitLogger.from_config("test.config", config)
    assert log.underlying.level == logging.DEBUG
    assert log.tool_name == "test.config"


def test_operation_tag_is_isolated_per_task() -> None:
    log = ToolkitLogger("test.tasks", console_output=False)
    seen: dict[str, list[str]] = {}

    async def run(name: str, delay: float) -> None:
        with log.operation(name):
            seen[name] = [log.current_operation]
            await asyncio.sleep(delay)
            seen[name].append(log.current_operation)

    async def main() -> None:
        await asyncio.gather(run("hash_file", 0.02), run("encrypt", 0.01))

    asyncio.run(main())
    assert seen == {"hash_file": ["hash_file", "hash_file"], "encrypt": ["encrypt", "encrypt"]}
    assert log.current_operation is None


def test_nested_operations_restore_outer_tag() -> None:
    log = ToolkitLogger("test.nested", console_output=False)
    with log.operation("outer"):
        with log.operation("inner"):
            assert log.current_operation == "inner"
        assert log.current_operation == "outer"
    assert log.current_operation is None
