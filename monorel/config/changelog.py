"""Changelog generator reference: a tagged variant over the accepted document shapes.

    false                         -> Disabled
    "some-module"                 -> Reference("some-module")
    ["some-module", {options}]    -> ReferenceWithOptions("some-module", {options})

Anything else is not a changelog reference; ``classify_changelog`` returns None
and the validator reports it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Tuple, Union

__all__ = [
    "Disabled",
    "Reference",
    "ReferenceWithOptions",
    "ChangelogOption",
    "ResolvedChangelog",
    "classify_changelog",
    "normalize_changelog",
    "resolve_changelog",
]


@dataclass(frozen=True)
class Disabled:
    pass


@dataclass(frozen=True)
class Reference:
    name: str


@dataclass(frozen=True)
class ReferenceWithOptions:
    name: str
    options: Any = None


ChangelogOption = Union[Disabled, Reference, ReferenceWithOptions]

ResolvedChangelog = Union[Literal[False], Tuple[str, Any]]


def classify_changelog(value: Any) -> Optional[ChangelogOption]:
    if value is False:
        return Disabled()
    if isinstance(value, str):
        return Reference(value)
    if isinstance(value, (list, tuple)) and len(value) == 2 and isinstance(value[0], str):
        return ReferenceWithOptions(value[0], value[1])
    return None


def resolve_changelog(option: ChangelogOption) -> ResolvedChangelog:
    if isinstance(option, Disabled):
        return False
    if isinstance(option, ReferenceWithOptions):
        return (option.name, option.options)
    return (option.name, None)


def normalize_changelog(value: Any) -> ResolvedChangelog:
    """Canonical form of an already-validated changelog value."""
    option = classify_changelog(value)
    if option is None:
        raise TypeError(f"not a changelog reference: {value!r}")
    return resolve_changelog(option)
