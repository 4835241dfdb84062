# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration loading for Error Prone options."""

from __future__ import annotations

from .loader import ConfigLoadResult, FieldUpdate, OptionsLoader, field_for_key, load_options, normalise_fragment
from .sources import ConfigSource, MappingConfigSource, PyProjectConfigSource, TomlConfigSource

__all__ = [
    "ConfigLoadResult",
    "ConfigSource",
    "FieldUpdate",
    "MappingConfigSource",
    "OptionsLoader",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "field_for_key",
    "load_options",
    "normalise_fragment",
]
