# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console
from rich.text import Text


def detect_tty(*, err: bool = False) -> bool:
    """Return ``True`` when stdout, or stderr when ``err`` is set, is a terminal."""

    stream = sys.stderr if err else sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=None)
def _cached_console(color: bool, emoji: bool, err: bool) -> Console:
    return Console(
        color_system="auto" if color else None,
        force_terminal=True,
        no_color=not color,
        emoji=emoji,
        soft_wrap=True,
        stderr=err,
    )


def get_console(*, color: bool, emoji: bool, err: bool = False) -> Console:
    """Return a Rich console configured for ``color`` and ``emoji`` preferences.

    Consoles are created lazily so that output redirection done after import
    (for example by test runners) is honoured.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.
        err: ``True`` to write to stderr instead of stdout.

    Returns:
        Console: Console matching the preferences and the TTY state of the
        stream it writes to.
    """

    if detect_tty(err=err):
        return _cached_console(color, emoji, err)
    return Console(color_system=None, no_color=True, emoji=emoji, soft_wrap=True, stderr=err)


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None,
    err: bool = False,
) -> None:
    color_enabled = detect_tty(err=err) if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji, err=err)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None, err: bool = False) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color, err=err)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None, err: bool = False) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color, err=err)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None, err: bool = False) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color, err=err)


__all__ = ["detect_tty", "emoji", "fail", "get_console", "ok", "warn"]
