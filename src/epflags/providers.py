# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lazily evaluated sources of free-form Error Prone arguments."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable


@runtime_checkable
class ArgumentProvider(Protocol):
    """Produce, on demand, a finite ordered sequence of arguments."""

    def as_arguments(self) -> Iterable[str]:
        """Return the arguments contributed by this provider.

        Returns:
            Iterable[str]: Arguments emitted verbatim after structured flags.
        """

        raise NotImplementedError


ArgumentFactory: TypeAlias = Callable[[], Iterable[str]]
ProviderLike: TypeAlias = ArgumentProvider | ArgumentFactory


@dataclass(slots=True, frozen=True)
class CallableArgumentProvider:
    """Adapt a zero-argument callable to :class:`ArgumentProvider`."""

    factory: ArgumentFactory

    def as_arguments(self) -> Iterable[str]:
        return self.factory()


def coerce_provider(value: ProviderLike) -> ArgumentProvider:
    """Return ``value`` as an :class:`ArgumentProvider`.

    Args:
        value: Provider instance or zero-argument callable.

    Returns:
        ArgumentProvider: ``value`` itself or a callable adapter around it.

    Raises:
        TypeError: If ``value`` is neither a provider nor callable.
    """

    if isinstance(value, ArgumentProvider):
        return value
    if callable(value):
        return CallableArgumentProvider(value)
    raise TypeError(f"argument providers must expose as_arguments() or be callable, got {type(value).__name__}")


def evaluate_provider(provider: ArgumentProvider) -> tuple[str, ...]:
    """Invoke ``provider`` once and materialise its arguments."""

    produced = provider.as_arguments()
    if isinstance(produced, str):
        raise TypeError("argument providers must return an iterable of strings, not a single string")
    return tuple(str(argument) for argument in produced)


__all__ = [
    "ArgumentFactory",
    "ArgumentProvider",
    "CallableArgumentProvider",
    "ProviderLike",
    "coerce_provider",
    "evaluate_provider",
]
