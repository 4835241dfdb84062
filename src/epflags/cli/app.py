# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface rendering Error Prone options from configuration."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich import box
from rich.table import Table

from ..config import ConfigLoadResult, FieldUpdate, OptionsLoader, field_for_key
from ..errors import ConfigError, ErrorProneOptionsError
from ..flags import BOOLEAN_FLAGS, check_flag, check_option_flag, excluded_paths_flag
from ..logging import fail, get_console, ok, warn
from ..options import ErrorProneOptions
from ..severity import CheckSeverity

app = typer.Typer(
    name="epflags",
    help="Render Error Prone compiler plugin arguments from structured options.",
    no_args_is_help=True,
    add_completion=False,
)

CONFIG_ERROR_EXIT_CODE = 2


class OutputFormat(str, Enum):
    """Supported layouts for rendered arguments."""

    LINES = "lines"
    JOINED = "joined"
    JSON = "json"


RootOption = Annotated[Path, typer.Option("--root", "-r", help="Project root searched for configuration.")]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Extra TOML file applied after project configuration."),
]
CheckOption = Annotated[
    list[str] | None,
    typer.Option("--check", help="Check override as NAME or NAME:SEVERITY. Repeatable."),
]
OptOption = Annotated[
    list[str] | None,
    typer.Option("--option", help="Check option as KEY or KEY=VALUE. Repeatable."),
]
ArgOption = Annotated[
    list[str] | None,
    typer.Option("--arg", help="Free-form argument appended verbatim. Repeatable."),
]
ToggleOption = Annotated[
    list[str] | None,
    typer.Option("--toggle", help="Boolean option to switch on, e.g. disable-all-checks. Repeatable."),
]
ExcludedPathsOption = Annotated[
    str | None,
    typer.Option("--excluded-paths", help="Regular expression of paths excluded from analysis."),
]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate status messages with emoji.")]


def parse_check_spec(spec: str) -> tuple[str, CheckSeverity | None]:
    """Split ``NAME[:SEVERITY]`` into a check name and optional severity.

    A suffix that is not a severity is kept as part of the name so the usual
    colon validation reports it when rendering.
    """

    head, sep, tail = spec.rpartition(":")
    if not sep:
        return spec, None
    try:
        return head, CheckSeverity.coerce(tail)
    except ValueError:
        return spec, None


def parse_option_spec(spec: str) -> tuple[str, str | None]:
    """Split ``KEY[=VALUE]`` into an option key and optional value."""

    key, sep, value = spec.partition("=")
    return key, (value if sep else None)


COMMAND_LINE_SOURCE = "command line"


def _apply_overrides(
    result: ConfigLoadResult,
    *,
    checks: list[str] | None,
    check_options: list[str] | None,
    extra_args: list[str] | None,
    toggles: list[str] | None,
    excluded_paths: str | None,
) -> ErrorProneOptions:
    """Apply command line overrides on top of the loaded options.

    Overrides are recorded in ``result.updates`` so provenance stays accurate.

    Returns:
        ErrorProneOptions: ``result.options`` after mutation.
    """

    options = result.options

    def _record(field: str, value: object) -> None:
        result.updates.append(FieldUpdate(field=field, source=COMMAND_LINE_SOURCE, value=value))

    boolean_fields = {name for name, _ in BOOLEAN_FLAGS}
    for toggle in toggles or ():
        field = field_for_key(toggle)
        if field not in boolean_fields:
            raise typer.BadParameter(f"unknown boolean option '{toggle}'", param_hint="--toggle")
        setattr(options, field, True)
        _record(field, True)
    if excluded_paths is not None:
        options.excluded_paths = excluded_paths
        _record("excluded_paths", excluded_paths)
    for spec in checks or ():
        name, severity = parse_check_spec(spec)
        options.check(name, severity)
        _record("checks", spec)
    for spec in check_options or ():
        key, value = parse_option_spec(spec)
        options.option(key, value)
        _record("check_options", spec)
    if extra_args:
        options.args(*extra_args)
        _record("errorprone_args", list(extra_args))
    return options


def _load(
    root: Path,
    config_file: Path | None,
    *,
    use_emoji: bool,
    err: bool,
) -> ConfigLoadResult:
    try:
        result = OptionsLoader.for_root(root, config_file=config_file).load()
    except ConfigError as exc:
        fail(str(exc), use_emoji=use_emoji, err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc
    for message in result.warnings:
        warn(message, use_emoji=use_emoji, err=err)
    return result


@app.command()
def render(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    check: CheckOption = None,
    option: OptOption = None,
    arg: ArgOption = None,
    toggle: ToggleOption = None,
    excluded_paths: ExcludedPathsOption = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output layout for the rendered arguments."),
    ] = OutputFormat.LINES,
    use_emoji: EmojiOption = True,
) -> None:
    """Print the Error Prone arguments for the resolved options."""

    result = _load(root, config_file, use_emoji=use_emoji, err=True)
    options = _apply_overrides(
        result,
        checks=check,
        check_options=option,
        extra_args=arg,
        toggles=toggle,
        excluded_paths=excluded_paths,
    )
    try:
        if output_format is OutputFormat.JOINED:
            typer.echo(options.joined_arguments())
            return
        arguments = options.render()
    except ErrorProneOptionsError as exc:
        fail(str(exc), use_emoji=use_emoji, err=True)
        raise typer.Exit(code=1) from exc
    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps(arguments))
        return
    for argument in arguments:
        typer.echo(argument)


@app.command()
def validate(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    check: CheckOption = None,
    option: OptOption = None,
    arg: ArgOption = None,
    toggle: ToggleOption = None,
    excluded_paths: ExcludedPathsOption = None,
    use_emoji: EmojiOption = True,
) -> None:
    """Check that the resolved options render without errors."""

    result = _load(root, config_file, use_emoji=use_emoji, err=False)
    options = _apply_overrides(
        result,
        checks=check,
        check_options=option,
        extra_args=arg,
        toggles=toggle,
        excluded_paths=excluded_paths,
    )
    try:
        arguments = options.render()
    except ErrorProneOptionsError as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc
    ok(f"Error Prone options are valid ({len(arguments)} arguments)", use_emoji=use_emoji)


@app.command()
def explain(
    root: RootOption = Path("."),
    config_file: ConfigOption = None,
    check: CheckOption = None,
    option: OptOption = None,
    arg: ArgOption = None,
    toggle: ToggleOption = None,
    excluded_paths: ExcludedPathsOption = None,
    use_emoji: EmojiOption = True,
) -> None:
    """Show which flag each configured setting renders to."""

    result = _load(root, config_file, use_emoji=use_emoji, err=False)
    _apply_overrides(
        result,
        checks=check,
        check_options=option,
        extra_args=arg,
        toggles=toggle,
        excluded_paths=excluded_paths,
    )
    try:
        table = build_explain_table(result)
    except ErrorProneOptionsError as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc
    get_console(color=False, emoji=use_emoji).print(table)


def build_explain_table(result: ConfigLoadResult) -> Table:
    """Return a table mapping each setting of ``result.options`` to its flag.

    Args:
        result: Loaded options with provenance; the options may carry
            command line overrides applied after loading.

    Returns:
        Table: Rich table with one row per rendered structured setting and
        free-form argument.

    Raises:
        ErrorProneOptionsError: If a structured setting is invalid.
    """

    options = result.options
    table = Table(title="Error Prone options", box=box.SIMPLE)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("Flag", overflow="fold")
    table.add_column("Source", overflow="fold")

    def _source(field: str) -> str:
        return result.source_for(field) or "-"

    for field, flag in BOOLEAN_FLAGS:
        if getattr(options, field):
            table.add_row(field, "true", flag, _source(field))
    if options.excluded_paths is not None:
        flag = excluded_paths_flag(options.excluded_paths)
        table.add_row("excluded_paths", options.excluded_paths, flag, _source("excluded_paths"))
    for name, severity in options.checks.items():
        severity = CheckSeverity.coerce(severity)
        table.add_row(f"checks.{name}", severity.value, check_flag(name, severity), _source("checks"))
    for key, value in options.check_options.items():
        table.add_row(f"check_options.{key}", value, check_option_flag(key, value), _source("check_options"))
    for argument in options.errorprone_args:
        table.add_row("errorprone_args", "-", argument, _source("errorprone_args"))
    if not table.row_count:
        table.add_row("-", "-", "(no arguments)", "-")
    return table


__all__ = ["OutputFormat", "app", "build_explain_table", "parse_check_spec", "parse_option_spec"]
