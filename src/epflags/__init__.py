# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render structured Error Prone options into compiler plugin arguments."""

from __future__ import annotations

from importlib import metadata

from .errors import ConfigError, EmbeddedColonError, EmbeddedWhitespaceError, ErrorProneOptionsError
from .options import ErrorProneOptions
from .providers import ArgumentProvider, CallableArgumentProvider
from .severity import CheckSeverity

__all__ = [
    "ArgumentProvider",
    "CallableArgumentProvider",
    "CheckSeverity",
    "ConfigError",
    "EmbeddedColonError",
    "EmbeddedWhitespaceError",
    "ErrorProneOptions",
    "ErrorProneOptionsError",
    "__version__",
]

try:
    __version__ = metadata.version("epflags")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
