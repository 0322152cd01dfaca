"""
Parser exceptions for the ``ddev`` command line.

Recent typer releases parse with their own copy of click, so the classes are
taken from whichever click module ``typer.Context`` is built on rather than
from a separately installed ``click``.
"""

import importlib
from types import ModuleType

import typer


def _click_exceptions() -> ModuleType:
    for klass in typer.Context.__mro__:
        package, _, module = klass.__module__.rpartition(".")
        if klass.__name__ == "Context" and module == "core":
            return importlib.import_module(f"{package}.exceptions")
    raise ImportError("typer.Context is not based on a click Context")


_exceptions = _click_exceptions()

Abort = _exceptions.Abort
ClickException = _exceptions.ClickException
UsageError = _exceptions.UsageError

__all__ = ["Abort", "ClickException", "UsageError"]
