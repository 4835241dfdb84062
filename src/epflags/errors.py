# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised while validating and loading Error Prone options."""

from __future__ import annotations


class ErrorProneOptionsError(ValueError):
    """Base class for invalid structured Error Prone options."""


class EmbeddedWhitespaceError(ErrorProneOptionsError):
    """Raised when a rendered argument would contain white space."""

    def __init__(self, argument: str) -> None:
        """Record the offending ``argument`` and build the user-facing message.

        Args:
            argument: Fully rendered argument including its flag prefix.
        """

        super().__init__(f'Error Prone options cannot contain white space: "{argument}".')
        self.argument = argument


class EmbeddedColonError(ErrorProneOptionsError):
    """Raised when a structured check name contains the ``:`` separator."""

    def __init__(self, check_name: str) -> None:
        super().__init__(f'Error Prone check name cannot contain a colon (":"): "{check_name}".')
        self.check_name = check_name


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


__all__ = [
    "ConfigError",
    "EmbeddedColonError",
    "EmbeddedWhitespaceError",
    "ErrorProneOptionsError",
]
