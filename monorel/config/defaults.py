"""Default template: every recognized option with its default value."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .._version import __version__

CONFIG_DIR = ".changeset"
CONFIG_FILENAME = "config.json"

SCHEMA_URL = f"https://unpkg.com/monorel@{__version__}/schema.json"

DEFAULT_CHANGELOG = "@changesets/cli/changelog"

EXPERIMENTAL_KEY = "___experimentalUnsafeOptions_WILL_CHANGE_IN_PATCH"

DEFAULT_WRITTEN_CONFIG: Mapping[str, Any] = MappingProxyType(
    {
        "$schema": SCHEMA_URL,
        "changelog": DEFAULT_CHANGELOG,
        "commit": False,
        "linked": (),
        "access": "restricted",
        "baseBranch": "master",
        "updateInternalDependencies": "patch",
        "ignore": (),
    }
)

# Accepted values for the enum-like options
ALLOWED_ACCESS = ("public", "restricted")
LEGACY_ACCESS = {"private": "restricted"}
ALLOWED_UPDATE_INTERNAL_DEPENDENCIES = ("patch", "minor")

# Keys inside the experimental object
EXPERIMENTAL_FLAGS = (
    "onlyUpdatePeerDependentsWhenOutOfRange",
    "useCalculatedVersionForSnapshots",
)

ALLOWED_TOP = frozenset(
    {
        "$schema",
        "changelog",
        "access",
        "commit",
        "baseBranch",
        "linked",
        "updateInternalDependencies",
        "ignore",
        EXPERIMENTAL_KEY,
    }
)
