# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration sources providing Error Prone option fragments."""

from __future__ import annotations

import copy
import logging
import os
import re
import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from ..errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_INCLUDE_KEY: Final[str] = "include"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "epflags"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILENAME: Final[str] = ".epflags.toml"

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]+)\}")
_TOML_CACHE: dict[tuple[Path, int], Mapping[str, Any]] = {}


@runtime_checkable
class ConfigSource(Protocol):
    """Provide configuration data loaded from disk or other mediums."""

    name: str
    """Identifier describing the configuration source."""

    def load(self) -> Mapping[str, Any]:
        """Return the raw option fragment provided by this source."""

        raise NotImplementedError

    def describe(self) -> str:
        """Return a human-readable description of the source."""

        raise NotImplementedError


class MappingConfigSource:
    """Serve a fixed in-memory fragment, typically built from CLI flags."""

    def __init__(self, data: Mapping[str, Any], *, name: str = "overrides") -> None:
        self._data = dict(data)
        self.name = name

    def load(self) -> Mapping[str, Any]:
        return copy.deepcopy(self._data)

    def describe(self) -> str:
        return f"{self.name} (in-memory)"


class TomlConfigSource:
    """Load option fragments from a TOML document with include support."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        include_key: str = DEFAULT_INCLUDE_KEY,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root_path = path
        self.name = name or str(path)
        self._include_key = include_key
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        merged = self._load(self._root_path, (), select=True)
        return expand_env(merged, self._env)

    def _load(self, path: Path, stack: tuple[Path, ...], *, select: bool = False) -> dict[str, Any]:
        """Read ``path`` and its includes, innermost first.

        ``stack`` holds the resolved files currently being read, so an include
        reaching the same file through another spelling is still a cycle.
        """

        if not path.exists():
            return {}
        resolved = path.resolve()
        if resolved in stack:
            include_chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"Circular include detected: {include_chain}")
        document = dict(self._read(resolved))
        if select:
            document = dict(self._select(document))
        includes = document.pop(self._include_key, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, path.parent):
            merged = deep_merge(merged, self._load(include_path, (*stack, resolved)))
        return deep_merge(merged, document)

    @staticmethod
    def _read(resolved: Path) -> Mapping[str, Any]:
        cache_key = (resolved, resolved.stat().st_mtime_ns)
        cached = _TOML_CACHE.get(cache_key)
        if cached is None:
            LOGGER.debug("Reading Error Prone configuration from %s", resolved)
            try:
                with resolved.open("rb") as handle:
                    cached = tomllib.load(handle)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {resolved}: {exc}") from exc
            _TOML_CACHE[cache_key] = cached
        return copy.deepcopy(cached)

    def _select(self, document: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return the part of the root ``document`` holding option keys.

        Included files are always read as plain option tables.
        """

        return document

    def _coerce_includes(self, raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, (str, Path)):
            return [self._resolve_path(Path(raw), base_dir)]
        if isinstance(raw, Iterable) and not isinstance(raw, Mapping):
            return [self._resolve_path(Path(item), base_dir) for item in raw]
        raise ConfigError(f"Unsupported include declaration: {raw!r}")

    @staticmethod
    def _resolve_path(path: Path, base_dir: Path) -> Path:
        return path if path.is_absolute() else (base_dir / path)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read options from ``[tool.epflags]`` within ``pyproject.toml``."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        super().__init__(path, name=str(path), env=env)

    def _select(self, document: Mapping[str, Any]) -> Mapping[str, Any]:
        tool_section = document.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {self.name} must be a table")
        return section

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base``; nested tables merge, anything else replaces."""

    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Expand ``$VAR`` and ``${VAR}`` references in string values of ``data``.

    Unknown variables are left as written.
    """

    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "ConfigSource",
    "DEFAULT_INCLUDE_KEY",
    "MappingConfigSource",
    "PROJECT_CONFIG_FILENAME",
    "PYPROJECT_FILENAME",
    "PYPROJECT_SECTION_KEY",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "deep_merge",
    "expand_env",
]
