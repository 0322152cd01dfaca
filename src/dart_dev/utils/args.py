"""Helpers shared by tools for validating and assembling process args."""

from __future__ import annotations

from typing import Callable, Iterable, NoReturn, Optional, Sequence

VERBOSE_FLAGS = ("-v", "--verbose")


def split_args(value: Optional[str]) -> list[str]:
    """Split a free-form ``--*-args`` option value on whitespace."""
    if not value:
        return []
    return value.split()


def ensure_verbose_flag(args: list[str]) -> list[str]:
    """Append ``-v`` unless a verbose flag is already present."""
    if not any(flag in args for flag in VERBOSE_FLAGS):
        args.append("-v")
    return args


def assert_no_positional_args(
    rest: Sequence[str],
    usage_exception: Callable[[str], NoReturn],
    *,
    command_name: Optional[str] = None,
    usage_footer: Optional[str] = None,
) -> None:
    """Report a usage error if the command received any positional args."""
    if not rest:
        return
    name = command_name or "this"
    message = (
        f'The "{name}" command does not support positional args '
        f"(got: {_join(rest)})."
    )
    if usage_footer:
        message = f"{message}\n{usage_footer}"
    usage_exception(message)


def _join(values: Iterable[str]) -> str:
    return " ".join(values)
