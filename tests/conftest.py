# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures and a reference parser for Error Prone flags."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import pytest

from epflags import CheckSeverity, ErrorProneOptions

_BOOLEAN_FLAGS = {
    "-XepDisableAllChecks": "disable_all_checks",
    "-XepAllErrorsAsWarnings": "all_errors_as_warnings",
    "-XepAllDisabledChecksAsWarnings": "all_disabled_checks_as_warnings",
    "-XepDisableWarningsInGeneratedCode": "disable_warnings_in_generated_code",
    "-XepIgnoreUnknownCheckNames": "ignore_unknown_check_names",
    "-XepCompilingTestOnlyCode": "compiling_test_only_code",
}


class InvalidCommandLineOption(ValueError):
    """Raised by the reference parser for arguments Error Prone would reject."""


@dataclass
class ParsedOptions:
    """Logical settings recovered from a list of Error Prone arguments."""

    booleans: dict[str, bool] = field(default_factory=lambda: dict.fromkeys(_BOOLEAN_FLAGS.values(), False))
    excluded_pattern: str | None = None
    severity_map: dict[str, CheckSeverity] = field(default_factory=dict)
    flags: dict[str, str] = field(default_factory=dict)
    remaining_args: list[str] = field(default_factory=list)


def parse_error_prone_args(arguments: Sequence[str]) -> ParsedOptions:
    """Parse ``arguments`` the way Error Prone's own option processing does."""

    parsed = ParsedOptions()
    for argument in arguments:
        if argument in _BOOLEAN_FLAGS:
            parsed.booleans[_BOOLEAN_FLAGS[argument]] = True
        elif argument.startswith("-XepExcludedPaths:"):
            parsed.excluded_pattern = argument.removeprefix("-XepExcludedPaths:")
        elif argument.startswith("-XepOpt:"):
            key, sep, value = argument.removeprefix("-XepOpt:").partition("=")
            parsed.flags[key] = value if sep else "true"
        elif argument.startswith("-Xep:"):
            parts = argument.removeprefix("-Xep:").split(":")
            if len(parts) == 1:
                parsed.severity_map[parts[0]] = CheckSeverity.DEFAULT
            elif len(parts) == 2:
                try:
                    parsed.severity_map[parts[0]] = CheckSeverity[parts[1]]
                except KeyError as exc:
                    raise InvalidCommandLineOption(f"invalid severity in {argument}") from exc
            else:
                raise InvalidCommandLineOption(f"invalid flag {argument}")
        else:
            parsed.remaining_args.append(argument)
    return parsed


def parse_joined(options: ErrorProneOptions) -> ParsedOptions:
    """Split the joined argument string on white space, as javac does, then parse it."""

    joined = options.joined_arguments()
    return parse_error_prone_args([part for part in re.split(r"\s+", joined) if part])


def assert_options_equal(options: ErrorProneOptions, parsed: ParsedOptions) -> None:
    for name in _BOOLEAN_FLAGS.values():
        assert parsed.booleans[name] == getattr(options, name), name
    assert parsed.excluded_pattern == options.excluded_paths
    assert parsed.severity_map == options.checks
    assert parsed.flags == options.check_options
    assert parsed.remaining_args == []


@pytest.fixture
def parse_options() -> Callable[[ErrorProneOptions], ParsedOptions]:
    """Return the reference parser applied to an options model."""

    return parse_joined


@pytest.fixture
def options_equal() -> Callable[[ErrorProneOptions, ParsedOptions], None]:
    """Return the assertion comparing a model with parsed settings."""

    return assert_options_equal
