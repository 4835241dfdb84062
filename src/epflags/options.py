# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Structured Error Prone options and their rendering into plugin arguments."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .flags import BOOLEAN_FLAGS, check_flag, check_option_flag, ensure_no_whitespace, excluded_paths_flag
from .providers import ArgumentProvider, ProviderLike, coerce_provider, evaluate_provider
from .severity import CheckSeverity

LOGGER = logging.getLogger(__name__)

SeverityLike = CheckSeverity | str
CheckSpec = str | tuple[str, SeverityLike]


class ErrorProneOptions(BaseModel):
    """Mutable description of the Error Prone settings for one compilation.

    Structured fields are validated when :meth:`render` runs, never on
    assignment, so a model can be populated in any order. Free-form arguments
    and argument providers bypass validation entirely and are emitted verbatim
    after the structured flags.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="forbid",
    )

    disable_all_checks: bool = Field(
        default=False,
        validation_alias=AliasChoices("disable_all_checks", "disableAllChecks"),
    )
    all_errors_as_warnings: bool = Field(
        default=False,
        validation_alias=AliasChoices("all_errors_as_warnings", "allErrorsAsWarnings"),
    )
    all_disabled_checks_as_warnings: bool = Field(
        default=False,
        validation_alias=AliasChoices("all_disabled_checks_as_warnings", "allDisabledChecksAsWarnings"),
    )
    disable_warnings_in_generated_code: bool = Field(
        default=False,
        validation_alias=AliasChoices("disable_warnings_in_generated_code", "disableWarningsInGeneratedCode"),
    )
    ignore_unknown_check_names: bool = Field(
        default=False,
        validation_alias=AliasChoices("ignore_unknown_check_names", "ignoreUnknownCheckNames"),
    )
    compiling_test_only_code: bool = Field(
        default=False,
        validation_alias=AliasChoices("compiling_test_only_code", "compilingTestOnlyCode", "isCompilingTestOnlyCode"),
    )
    excluded_paths: str | None = Field(
        default=None,
        validation_alias=AliasChoices("excluded_paths", "excludedPaths"),
    )
    checks: dict[str, CheckSeverity] = Field(default_factory=dict)
    check_options: dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("check_options", "checkOptions"),
    )
    errorprone_args: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("errorprone_args", "errorproneArgs", "extra_args", "extraArgs"),
    )
    errorprone_argument_providers: list[ArgumentProvider] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "errorprone_argument_providers",
            "errorproneArgumentProviders",
            "extra_argument_providers",
            "extraArgumentProviders",
        ),
    )

    @field_validator("checks", mode="before")
    @classmethod
    def _coerce_checks(cls, value: Any) -> Any:
        """Accept case-insensitive severity names for check overrides.

        Args:
            value: Raw mapping of check names to severities.

        Returns:
            Any: Mapping with severities normalised to :class:`CheckSeverity`,
            or ``value`` untouched when it is not a mapping.
        """

        if not isinstance(value, Mapping):
            return value
        return {str(name): CheckSeverity.coerce(severity) for name, severity in value.items()}

    @field_validator("errorprone_argument_providers", mode="before")
    @classmethod
    def _coerce_providers(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return value
        return [coerce_provider(provider) for provider in value]

    # Checks -----------------------------------------------------------------

    def check(self, name: CheckSpec, severity: SeverityLike | None = None) -> None:
        """Register a check, optionally overriding its severity.

        Without a severity an absent check is added as
        :attr:`CheckSeverity.DEFAULT` and a present check is left untouched.
        With a severity the entry is set, replacing any earlier value.

        Args:
            name: Check name, or a ``(name, severity)`` pair.
            severity: Optional severity override.
        """

        if isinstance(name, tuple):
            if severity is not None:
                raise TypeError("severity cannot be passed alongside a (name, severity) pair")
            name, severity = name
        if severity is None:
            self.checks.setdefault(name, CheckSeverity.DEFAULT)
            return
        self.checks[name] = CheckSeverity.coerce(severity)

    def enable(self, *names: str) -> None:
        """Enable ``names`` at their default severity."""

        self._set_severity(names, CheckSeverity.DEFAULT)

    def disable(self, *names: str) -> None:
        """Turn ``names`` off."""

        self._set_severity(names, CheckSeverity.OFF)

    def warn(self, *names: str) -> None:
        """Report ``names`` as warnings."""

        self._set_severity(names, CheckSeverity.WARN)

    def error(self, *names: str) -> None:
        """Report ``names`` as errors."""

        self._set_severity(names, CheckSeverity.ERROR)

    def _set_severity(self, names: Iterable[str], severity: CheckSeverity) -> None:
        for name in names:
            self.checks[name] = severity

    # Check options ----------------------------------------------------------

    def option(self, key: str, value: str | None = None) -> None:
        """Register a check option.

        Args:
            key: Option key, usually ``<CheckName>:<Option>``.
            value: Option value. When omitted an absent key defaults to ``""``
                and a present key keeps its value.
        """

        if value is None:
            self.check_options.setdefault(key, "")
            return
        self.check_options[key] = value

    # Free-form arguments ----------------------------------------------------

    def args(self, *values: str) -> None:
        """Append free-form arguments, emitted verbatim and unvalidated."""

        self.errorprone_args.extend(values)

    def argument_provider(self, provider: ProviderLike) -> ProviderLike:
        """Append a lazily evaluated argument provider.

        Usable as a decorator on a zero-argument function.

        Args:
            provider: Provider instance or callable returning arguments.

        Returns:
            ProviderLike: ``provider`` unchanged.
        """

        self.errorprone_argument_providers.append(coerce_provider(provider))
        return provider

    # Rendering --------------------------------------------------------------

    def render(self) -> list[str]:
        """Render the options into Error Prone plugin arguments.

        Structured flags come first in a fixed order: boolean toggles,
        excluded paths, checks, then check options. Free-form arguments and
        the output of each argument provider follow. Providers are invoked
        once per call, in registration order.

        Returns:
            list[str]: Ordered arguments for the ``-Xplugin:ErrorProne`` value.

        Raises:
            EmbeddedColonError: If a structured check name contains ``:``.
            EmbeddedWhitespaceError: If a structured flag contains white space.
        """

        arguments = [flag for field_name, flag in BOOLEAN_FLAGS if getattr(self, field_name)]
        if self.excluded_paths is not None:
            arguments.append(excluded_paths_flag(self.excluded_paths))
        for name, severity in self.checks.items():
            arguments.append(check_flag(name, CheckSeverity.coerce(severity)))
        for key, value in self.check_options.items():
            arguments.append(check_option_flag(key, value))
        structured_count = len(arguments)

        arguments.extend(self.errorprone_args)
        for provider in self.errorprone_argument_providers:
            arguments.extend(evaluate_provider(coerce_provider(provider)))

        LOGGER.debug(
            "Rendered %d Error Prone arguments (%d structured, %d free-form)",
            len(arguments),
            structured_count,
            len(arguments) - structured_count,
        )
        return arguments

    def joined_arguments(self) -> str:
        """Return the arguments joined into the string javac splits on white space.

        Unlike :meth:`render`, free-form arguments are checked too: any white
        space inside one argument would be split into several by javac.

        Raises:
            EmbeddedWhitespaceError: If any argument contains white space.
        """

        return " ".join(ensure_no_whitespace(argument) for argument in self.render())

    # Serialization ----------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible snapshot of the structured state.

        Argument providers are omitted since they are not data.
        """

        return self.model_dump(mode="json", exclude={"errorprone_argument_providers"})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ErrorProneOptions:
        """Build options from a mapping using snake_case or camelCase keys."""

        return cls.model_validate(dict(data))


__all__ = ["CheckSpec", "ErrorProneOptions", "SeverityLike"]
