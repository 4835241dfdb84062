# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Canonical Error Prone flag spellings and the helpers that format them."""

from __future__ import annotations

import re
from typing import Final

from .errors import EmbeddedColonError, EmbeddedWhitespaceError
from .severity import CheckSeverity

DISABLE_ALL_CHECKS: Final[str] = "-XepDisableAllChecks"
ALL_ERRORS_AS_WARNINGS: Final[str] = "-XepAllErrorsAsWarnings"
ALL_DISABLED_CHECKS_AS_WARNINGS: Final[str] = "-XepAllDisabledChecksAsWarnings"
DISABLE_WARNINGS_IN_GENERATED_CODE: Final[str] = "-XepDisableWarningsInGeneratedCode"
IGNORE_UNKNOWN_CHECK_NAMES: Final[str] = "-XepIgnoreUnknownCheckNames"
COMPILING_TEST_ONLY_CODE: Final[str] = "-XepCompilingTestOnlyCode"

EXCLUDED_PATHS_PREFIX: Final[str] = "-XepExcludedPaths:"
CHECK_PREFIX: Final[str] = "-Xep:"
CHECK_OPTION_PREFIX: Final[str] = "-XepOpt:"

# Field name -> flag, in render order.
BOOLEAN_FLAGS: Final[tuple[tuple[str, str], ...]] = (
    ("disable_all_checks", DISABLE_ALL_CHECKS),
    ("all_errors_as_warnings", ALL_ERRORS_AS_WARNINGS),
    ("all_disabled_checks_as_warnings", ALL_DISABLED_CHECKS_AS_WARNINGS),
    ("disable_warnings_in_generated_code", DISABLE_WARNINGS_IN_GENERATED_CODE),
    ("ignore_unknown_check_names", IGNORE_UNKNOWN_CHECK_NAMES),
    ("compiling_test_only_code", COMPILING_TEST_ONLY_CODE),
)

# Unicode White_Space, which is narrower than Python's \s (no U+001C..U+001F).
_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(
    "[\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]"
)


def ensure_no_whitespace(argument: str) -> str:
    """Return ``argument`` unchanged, rejecting any embedded white space.

    Args:
        argument: Fully rendered argument.

    Returns:
        str: The same argument.

    Raises:
        EmbeddedWhitespaceError: If ``argument`` contains white space.
    """

    if _WHITESPACE_RE.search(argument):
        raise EmbeddedWhitespaceError(argument)
    return argument


def ensure_check_name(name: str) -> str:
    """Reject check names containing the ``:`` field separator."""

    if ":" in name:
        raise EmbeddedColonError(name)
    return name


def excluded_paths_flag(pattern: str) -> str:
    """Return the validated ``-XepExcludedPaths:`` flag for ``pattern``."""

    return ensure_no_whitespace(f"{EXCLUDED_PATHS_PREFIX}{pattern}")


def check_flag(name: str, severity: CheckSeverity) -> str:
    """Return the validated ``-Xep:`` flag for a check.

    The colon check runs first so ``"Foo:OFF"`` is reported as a bad name even
    when other parts of the flag would also fail.

    Args:
        name: Check name as configured.
        severity: Severity override for the check.

    Returns:
        str: ``-Xep:<name>`` for :attr:`CheckSeverity.DEFAULT`, otherwise
        ``-Xep:<name>:<SEVERITY>``.
    """

    ensure_check_name(name)
    return ensure_no_whitespace(f"{CHECK_PREFIX}{name}{severity.flag_suffix}")


def check_option_flag(key: str, value: str) -> str:
    """Return the validated ``-XepOpt:<key>=<value>`` flag."""

    return ensure_no_whitespace(f"{CHECK_OPTION_PREFIX}{key}={value}")


__all__ = [
    "ALL_DISABLED_CHECKS_AS_WARNINGS",
    "ALL_ERRORS_AS_WARNINGS",
    "BOOLEAN_FLAGS",
    "CHECK_OPTION_PREFIX",
    "CHECK_PREFIX",
    "COMPILING_TEST_ONLY_CODE",
    "DISABLE_ALL_CHECKS",
    "DISABLE_WARNINGS_IN_GENERATED_CODE",
    "EXCLUDED_PATHS_PREFIX",
    "IGNORE_UNKNOWN_CHECK_NAMES",
    "check_flag",
    "check_option_flag",
    "ensure_check_name",
    "ensure_no_whitespace",
    "excluded_paths_flag",
]
