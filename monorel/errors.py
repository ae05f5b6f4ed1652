from __future__ import annotations

"""Typed error taxonomy.

Only `monorel` and `monorel.errors` are public import roots. Everything else is internal.
This module exposes the operator-facing error classes and a small helper `format_error`.
"""

from typing import Iterable, List

__all__ = [
    "MonorelError",
    "ValidationError",
    "ConfigReadError",
    "WorkspaceError",
    "CLIError",
    "VALIDATION_BANNER",
    "format_error",
]

VALIDATION_BANNER = "Some errors occurred when validating the changesets config:"


class MonorelError(Exception):
    """Base class for all typed, operator-facing errors in monorel."""
    pass


class ValidationError(MonorelError):
    """The config document was rejected.

    Carries every problem found in one pass, in the order the checks ran.
    ``str(err)`` is the banner line followed by one message per line.
    """

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = list(messages)
        super().__init__(VALIDATION_BANNER + "\n" + "\n".join(self.messages))


class ConfigReadError(MonorelError):
    """Config document missing, unreadable, or not valid JSON."""
    pass


class WorkspaceError(MonorelError):
    """Package discovery failed (bad package.json, duplicate names, etc.)."""
    pass


class CLIError(MonorelError):
    """Generic CLI failure wrapper for unexpected errors in CLI code paths."""
    pass


def format_error(e: BaseException) -> str:
    """Return a short, uniform operator-facing message like 'ConfigReadError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name


# Keep star-export order deterministic for tests and tooling
__all__ = sorted(__all__)
