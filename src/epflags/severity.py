# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity levels accepted by Error Prone check overrides."""

from __future__ import annotations

from enum import Enum


class CheckSeverity(str, Enum):
    """Severity assigned to a single Error Prone check."""

    DEFAULT = "DEFAULT"
    OFF = "OFF"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def flag_suffix(self) -> str:
        """Return the ``-Xep:<name>`` suffix rendered for this severity.

        Returns:
            str: Empty for :attr:`DEFAULT`, otherwise ``":<SEVERITY>"``.
        """

        if self is CheckSeverity.DEFAULT:
            return ""
        return f":{self.value}"

    @classmethod
    def coerce(cls, value: CheckSeverity | str) -> CheckSeverity:
        """Return the severity matching ``value``.

        Args:
            value: Severity member or a case-insensitive severity name.

        Returns:
            CheckSeverity: Matching severity member.

        Raises:
            ValueError: If ``value`` does not name a known severity.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        choices = ", ".join(member.value for member in cls)
        raise ValueError(f"unknown check severity {value!r}; expected one of {choices}")


__all__ = ["CheckSeverity"]
