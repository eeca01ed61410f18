"""
CyberVault Configuration
=========================

Dataclass configuration persisted as TOML. The file has three tables::

    [global]      logging settings
    [vault]       default algorithm per operation, file size ceiling,
                  optional legacy fallback key
    [generator]   password length bounds and default character classes

Keys missing from a table keep their defaults; keys the dataclass does not
declare are ignored. Nothing here is process-wide state: the loaded
:class:`ToolkitConfig` is handed to the engine, which passes the relevant
defaults down on every call.

References:
    - TOML v1.0.0. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# <project_root>/config.toml, used when no path is given
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


@dataclass(slots=True)
class VaultConfig:
    """Crypto dispatcher and file hashing settings."""

    default_encrypt_algorithm: str = "AES"
    default_hash_algorithm: str = "SHA256"
    default_file_hash_algorithm: str = "SHA256"
    # Empty keeps keyed ciphers strict (MissingKey when no key is given)
    legacy_default_key: str = ""
    max_file_size: int = 104_857_600  # 100 MiB

    def __post_init__(self) -> None:
        if self.max_file_size <= 0:
            raise ValueError(f"vault.max_file_size must be positive, got {self.max_file_size}")


@dataclass(slots=True)
class GeneratorConfig:
    """Password generator bounds and default character classes."""

    default_length: int = 16
    min_length: int = 8
    max_length: int = 32
    uppercase: bool = True
    lowercase: bool = True
    numbers: bool = True
    symbols: bool = True

    def __post_init__(self) -> None:
        if not 1 <= self.min_length <= self.default_length <= self.max_length:
            raise ValueError(
                "generator lengths must satisfy 1 <= min_length <= default_length "
                f"<= max_length, got {self.min_length}/{self.default_length}/{self.max_length}"
            )


@dataclass(slots=True)
class GlobalConfig:
    """Logging settings shared by every command."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# TOML table -> (ToolkitConfig attribute, section dataclass)
_SECTIONS: dict[str, tuple[str, type]] = {
    "global": ("global_settings", GlobalConfig),
    "vault": ("vault", VaultConfig),
    "generator": ("generator", GeneratorConfig),
}


@dataclass(slots=True)
class ToolkitConfig:
    """Root configuration object.

    Usage:
        >>> config = ToolkitConfig.load("config.toml")
        >>> config.vault.default_encrypt_algorithm
        'AES'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    vault: VaultConfig = field(default_factory=VaultConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> ToolkitConfig:
        """Read a TOML file into a :class:`ToolkitConfig`.

        With no *path*, ``config.toml`` in the project root is used if it
        exists and built-in defaults otherwise.

        Raises:
            FileNotFoundError: An explicit *path* does not exist.
            ValueError: A section holds inconsistent values.
        """
        if path is None:
            if not _DEFAULT_CONFIG_PATH.is_file():
                return cls()
            config_path = _DEFAULT_CONFIG_PATH
        else:
            config_path = Path(path)
            if not config_path.is_file():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with config_path.open("rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        sections = {
            attr: _build_section(section_cls, raw.get(table) or {})
            for table, (attr, section_cls) in _SECTIONS.items()
        }
        return cls(**sections)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @property
    def default_key(self) -> Optional[str]:
        """The legacy fallback key, or ``None`` when keys are mandatory."""
        return self.vault.legacy_default_key or None


def _build_section(section_cls: type, data: dict[str, Any]) -> Any:
    """Instantiate *section_cls* from the keys it declares, ignoring the rest."""
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{k: v for k, v in data.items() if k in known})


_cached: Optional[ToolkitConfig] = None


def get_config(path: str | Path | None = None) -> ToolkitConfig:
    """Return a cached :class:`ToolkitConfig`; an explicit *path* reloads it."""
    global _cached
    if _cached is None or path is not None:
        _cached = ToolkitConfig.load(path)
    return _cached
