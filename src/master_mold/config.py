# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and TOML loader for the dispatcher."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigLoadError

CONFIG_FILE_NAME: Final[str] = "config.toml"
DEFAULT_BASE_DIR: Final[str] = "${HOME}/.master-mold"
DEFAULT_TIMEOUT: Final[int] = 10
BASE_DIR_ENV: Final[str] = "MASTER_MOLD_BASE_DIR"
TIMEOUT_ENV: Final[str] = "MASTER_MOLD_TIMEOUT"
HOME_ENV: Final[str] = "HOME"
DEFAULT_SEARCH_DIRS: Final[tuple[str, ...]] = ("config", DEFAULT_BASE_DIR)

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")
_ENV_OVERRIDES: Final[Mapping[str, str]] = {
    BASE_DIR_ENV: "base_dir",
    TIMEOUT_ENV: "timeout",
}


def _home_directory() -> str | None:
    try:
        return str(Path.home())
    except RuntimeError:
        return None


def expand_env_string(value: str, env: Mapping[str, str] | None = None) -> str:
    """Expand ``$VAR`` and ``${VAR}`` references in ``value``.

    Unknown variables are left untouched, except an unset ``HOME`` which
    resolves to the user's home directory.
    """

    source = os.environ if env is None else env

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        if key == HOME_ENV and key not in source:
            return _home_directory() or match.group(0)
        return source.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def expand_path(value: str, env: Mapping[str, str] | None = None) -> Path:
    """Return ``value`` as a path with environment references and ``~`` expanded."""

    return Path(expand_env_string(value, env)).expanduser()


class MasterMoldConfig(BaseModel):
    """Effective dispatcher configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    base_dir: str = DEFAULT_BASE_DIR
    timeout: int = Field(default=DEFAULT_TIMEOUT, ge=0)

    def expanded_base_dir(self, env: Mapping[str, str] | None = None) -> Path:
        """Return :attr:`base_dir` with environment references expanded."""

        return expand_path(self.base_dir, env)

    def to_toml(self) -> str:
        """Render the configuration as a TOML document."""

        return f'base_dir = "{_escape_toml(self.base_dir)}"\ntimeout = {self.timeout}\n'


def _escape_toml(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


@dataclass(frozen=True, slots=True)
class ConfigLoadResult:
    """Configuration together with where it came from."""

    config: MasterMoldConfig
    source: Path | None
    created: bool = False
    warnings: tuple[str, ...] = ()


class ConfigLoader:
    """Locate, read, and validate ``config.toml``.

    The first ``config.toml`` found in ``search_dirs`` wins. When none exists
    the built-in defaults are used and, if ``write_default`` is set, written
    to the last search directory so the user has a file to edit.
    """

    def __init__(
        self,
        search_dirs: Sequence[str | Path] = DEFAULT_SEARCH_DIRS,
        *,
        explicit_path: Path | None = None,
        write_default: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env
        self._search_dirs = tuple(expand_path(str(entry), self._env) for entry in search_dirs)
        self._explicit_path = explicit_path
        self._write_default = write_default

    @property
    def search_dirs(self) -> tuple[Path, ...]:
        """Return the expanded search directories in precedence order."""

        return self._search_dirs

    def locate(self) -> Path | None:
        """Return the configuration file that would be loaded, if any.

        Raises:
            ConfigLoadError: If an explicit path was given and does not exist.
        """

        if self._explicit_path is not None:
            if not self._explicit_path.is_file():
                raise ConfigLoadError(f"configuration file not found: {self._explicit_path}")
            return self._explicit_path
        for directory in self._search_dirs:
            candidate = directory / CONFIG_FILE_NAME
            if candidate.is_file():
                return candidate
        return None

    def load(self) -> ConfigLoadResult:
        """Return the effective configuration.

        Raises:
            ConfigLoadError: If the file cannot be parsed or fails validation.
        """

        path = self.locate()
        created = False
        warnings: list[str] = []
        if path is None:
            data: dict[str, Any] = {}
            if self._write_default:
                try:
                    path = self._write_defaults()
                except OSError as exc:
                    warnings.append(f"failed to create default config: {exc}")
                created = path is not None
        else:
            data = self._read(path)
        data.update(self._environment_overrides())
        try:
            config = MasterMoldConfig.model_validate(data)
        except ValidationError as exc:
            location = path or "defaults"
            raise ConfigLoadError(f"invalid configuration in {location}: {exc}") from exc
        return ConfigLoadResult(config=config, source=path, created=created, warnings=tuple(warnings))

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("rb") as handle:
                document = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigLoadError(f"failed to parse {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigLoadError(f"failed to read config file {path}: {exc}") from exc
        return dict(document)

    def _environment_overrides(self) -> dict[str, str]:
        overrides: dict[str, str] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = self._env.get(env_name)
            if value:
                overrides[field_name] = value
        return overrides

    def _write_defaults(self) -> Path | None:
        if not self._search_dirs:
            return None
        target = self._search_dirs[-1] / CONFIG_FILE_NAME
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(MasterMoldConfig().to_toml(), encoding="utf-8")
        return target


def load_config(
    *,
    explicit_path: Path | None = None,
    write_default: bool = False,
    env: Mapping[str, str] | None = None,
) -> ConfigLoadResult:
    """Load configuration from the conventional locations."""

    loader = ConfigLoader(explicit_path=explicit_path, write_default=write_default, env=env)
    return loader.load()


__all__ = [
    "BASE_DIR_ENV",
    "CONFIG_FILE_NAME",
    "ConfigLoadResult",
    "ConfigLoader",
    "DEFAULT_BASE_DIR",
    "DEFAULT_SEARCH_DIRS",
    "DEFAULT_TIMEOUT",
    "HOME_ENV",
    "MasterMoldConfig",
    "TIMEOUT_ENV",
    "expand_env_string",
    "expand_path",
    "load_config",
]
