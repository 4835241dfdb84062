# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered loading of Error Prone options with provenance tracking."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigError
from ..options import ErrorProneOptions
from .sources import (
    PROJECT_CONFIG_FILENAME,
    PYPROJECT_FILENAME,
    ConfigSource,
    PyProjectConfigSource,
    TomlConfigSource,
    deep_merge,
)

LOGGER = logging.getLogger(__name__)

# Providers are code, not data, so configuration files cannot declare them.
_NON_CONFIGURABLE: Final[frozenset[str]] = frozenset({"errorprone_argument_providers"})
_TABLE_FIELDS: Final[frozenset[str]] = frozenset({"checks", "check_options"})


def _build_key_index() -> dict[str, str]:
    """Map every accepted spelling of an option key to its field name."""

    index: dict[str, str] = {}
    for field_name, info in ErrorProneOptions.model_fields.items():
        if field_name in _NON_CONFIGURABLE:
            continue
        index[field_name] = field_name
        alias = info.validation_alias
        if isinstance(alias, AliasChoices):
            for choice in alias.choices:
                if isinstance(choice, str):
                    index[choice] = field_name
        elif isinstance(alias, str):
            index[alias] = field_name
        index[field_name.replace("_", "-")] = field_name
    return index


_KEY_INDEX: Final[dict[str, str]] = _build_key_index()


def field_for_key(key: str) -> str | None:
    """Return the option field spelled ``key`` (snake, kebab or camel case), if any."""

    return _KEY_INDEX.get(key)


class FieldUpdate(BaseModel):
    """Description of a single option mutation applied by a source."""

    model_config = ConfigDict(validate_assignment=True)

    field: str
    source: str
    value: Any


class ConfigLoadResult(BaseModel):
    """Container bundling resolved options with provenance metadata."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    options: ErrorProneOptions
    updates: list[FieldUpdate] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def source_for(self, field: str) -> str | None:
        """Return the last source that set ``field``, if any."""

        for update in reversed(self.updates):
            if update.field == field:
                return update.source
        return None


class OptionsLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader that merges ``sources``, later ones winning.

        Args:
            sources: Ordered collection of configuration sources.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        config_file: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> OptionsLoader:
        """Build a loader for ``project_root``.

        Precedence, lowest first: ``[tool.epflags]`` in ``pyproject.toml``,
        ``.epflags.toml``, then ``config_file`` when given.

        Args:
            project_root: Directory searched for configuration files.
            config_file: Optional explicit configuration file; must exist.
            env: Environment used for ``$VAR`` expansion.

        Returns:
            OptionsLoader: Loader configured with the default precedence.

        Raises:
            ConfigError: If ``config_file`` does not exist.
        """

        root = project_root.resolve()
        sources: list[ConfigSource] = [
            PyProjectConfigSource(root / PYPROJECT_FILENAME, env=env),
            TomlConfigSource(root / PROJECT_CONFIG_FILENAME, env=env),
        ]
        if config_file is not None:
            if not config_file.is_file():
                raise ConfigError(f"Configuration file not found: {config_file}")
            sources.append(TomlConfigSource(config_file, env=env))
        return cls(sources)

    def load(self) -> ConfigLoadResult:
        """Merge every source into a fresh :class:`ErrorProneOptions`.

        Returns:
            ConfigLoadResult: Resolved options plus provenance and warnings.

        Raises:
            ConfigError: If a source holds values of the wrong shape.
        """

        merged: dict[str, Any] = {}
        updates: list[FieldUpdate] = []
        warnings: list[str] = []
        for source in self._sources:
            raw = source.load()
            if not raw:
                continue
            fragment = normalise_fragment(raw, source=source.describe(), warnings=warnings)
            _validate_fragment(fragment, source.describe())
            updates.extend(
                FieldUpdate(field=field, source=source.describe(), value=value) for field, value in fragment.items()
            )
            merged = _merge_fragment(merged, fragment)
        options = _validate_fragment(merged, "merged configuration")
        LOGGER.debug("Loaded Error Prone options from %d source(s)", len(self._sources))
        return ConfigLoadResult(options=options, updates=updates, warnings=warnings)


def normalise_fragment(
    raw: Mapping[str, Any],
    *,
    source: str,
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    """Return ``raw`` keyed by field name, with unknown keys dropped.

    Args:
        raw: Option fragment as read from a source.
        source: Source description used in messages.
        warnings: Optional list collecting messages about ignored keys.

    Returns:
        dict[str, Any]: Fragment ready for validation.

    Raises:
        ConfigError: If a table field is not a table.
    """

    fragment: dict[str, Any] = {}
    for key, value in raw.items():
        field = field_for_key(str(key))
        if field is None:
            if warnings is not None:
                warnings.append(f"Ignoring unknown option '{key}' in {source}")
            continue
        if field in _TABLE_FIELDS:
            if not isinstance(value, Mapping):
                raise ConfigError(f"'{key}' in {source} must be a table")
            value = dict(value)
        if field == "check_options":
            value = {name: _option_value(entry, name, source) for name, entry in value.items()}
        fragment[field] = value
    return fragment


def _option_value(value: Any, name: str, source: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(f"check option '{name}' in {source} must be a scalar value")


def _merge_fragment(base: Mapping[str, Any], fragment: Mapping[str, Any]) -> dict[str, Any]:
    tables = {key: value for key, value in fragment.items() if key in _TABLE_FIELDS}
    scalars = {key: value for key, value in fragment.items() if key not in _TABLE_FIELDS}
    merged = deep_merge(base, tables)
    merged.update(scalars)
    return merged


def _validate_fragment(fragment: Mapping[str, Any], source: str) -> ErrorProneOptions:
    try:
        return ErrorProneOptions.model_validate(dict(fragment))
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError(f"Invalid Error Prone options in {source}: {details}") from exc


def load_options(
    project_root: Path,
    *,
    config_file: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ErrorProneOptions:
    """Return options resolved from the configuration files under ``project_root``."""

    return OptionsLoader.for_root(project_root, config_file=config_file, env=env).load().options


__all__ = [
    "ConfigLoadResult",
    "FieldUpdate",
    "OptionsLoader",
    "field_for_key",
    "load_options",
    "normalise_fragment",
]
