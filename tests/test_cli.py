# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the epflags command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from epflags.cli.app import app, parse_check_spec, parse_option_spec
from epflags.severity import CheckSeverity


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / ".epflags.toml").write_text(
        """
ignore_unknown_check_names = true

[checks]
ArrayEquals = "OFF"

[check_options]
"NullAway:AnnotatedPackages" = "com.example"
""".strip(),
        encoding="utf-8",
    )
    return tmp_path


def test_render_prints_one_argument_per_line(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["render", "--root", str(project), "--check", "BetaApi", "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        "-XepIgnoreUnknownCheckNames",
        "-Xep:ArrayEquals:OFF",
        "-Xep:BetaApi",
        "-XepOpt:NullAway:AnnotatedPackages=com.example",
    ]


def test_render_json_applies_all_overrides(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "render",
            "--root",
            str(project),
            "--format",
            "json",
            "--toggle",
            "disable-all-checks",
            "--excluded-paths",
            ".*/gen/.*",
            "--check",
            "ArrayEquals:error",
            "--option",
            "Foo",
            "--arg",
            "-XepPatchLocation:IN_PLACE",
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        "-XepDisableAllChecks",
        "-XepIgnoreUnknownCheckNames",
        "-XepExcludedPaths:.*/gen/.*",
        "-Xep:ArrayEquals:ERROR",
        "-XepOpt:NullAway:AnnotatedPackages=com.example",
        "-XepOpt:Foo=",
        "-XepPatchLocation:IN_PLACE",
    ]


def test_render_joined_rejects_white_space_in_free_form_arguments(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["render", "--root", str(project), "--format", "joined", "--arg", "-Xep:Foo -Xep:Bar", "--no-emoji"],
    )

    assert result.exit_code == 1
    assert 'cannot contain white space: "-Xep:Foo -Xep:Bar"' in result.output


def test_render_joined_output(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["render", "--root", str(tmp_path), "--format", "joined", "--check", "BetaApi", "--toggle", "disableAllChecks"],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "-XepDisableAllChecks -Xep:BetaApi"


def test_validate_reports_colon_in_check_name(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["validate", "--root", str(project), "--check", "Foo:Bar", "--no-emoji"])

    assert result.exit_code == 1
    assert 'Error Prone check name cannot contain a colon (":"): "Foo:Bar".' in result.output


def test_validate_success(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["validate", "--root", str(project), "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert "Error Prone options are valid (3 arguments)" in result.output


def test_config_errors_exit_with_code_two(tmp_path: Path) -> None:
    (tmp_path / ".epflags.toml").write_text('[checks]\nArrayEquals = "LOUD"\n', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["validate", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 2
    assert "Invalid Error Prone options" in result.output


def test_missing_config_file_exits_with_code_two(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["render", "--root", str(tmp_path), "--config", str(tmp_path / "nope.toml")])

    assert result.exit_code == 2
    assert "not found" in result.output


def test_unknown_toggle_is_a_usage_error(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["render", "--root", str(tmp_path), "--toggle", "disable-everything"])

    assert result.exit_code == 2


def test_explain_lists_flags_and_sources(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["explain", "--root", str(project), "--check", "BetaApi:warn", "--no-emoji"],
        env={"COLUMNS": "240"},
    )

    assert result.exit_code == 0, result.output
    assert "-Xep:ArrayEquals:OFF" in result.stdout
    assert "-Xep:BetaApi:WARN" in result.stdout
    assert "-XepOpt:NullAway:AnnotatedPackages=com.example" in result.stdout
    assert "command line" in result.stdout
    assert ".epflags.toml" in result.stdout


@pytest.mark.parametrize(
    ("spec", "expected"),
    [
        ("BetaApi", ("BetaApi", None)),
        ("BetaApi:off", ("BetaApi", CheckSeverity.OFF)),
        ("Foo:Bar", ("Foo:Bar", None)),
    ],
)
def test_parse_check_spec(spec: str, expected: tuple[str, CheckSeverity | None]) -> None:
    assert parse_check_spec(spec) == expected


def test_parse_option_spec() -> None:
    assert parse_option_spec("Foo") == ("Foo", None)
    assert parse_option_spec("NullAway:AnnotatedPackages=com.example") == ("NullAway:AnnotatedPackages", "com.example")
    assert parse_option_spec("Foo=") == ("Foo", "")
