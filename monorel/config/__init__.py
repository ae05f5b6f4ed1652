"""Release config: default template, validation, and loading."""
from __future__ import annotations

from .changelog import (
    Disabled,
    Reference,
    ReferenceWithOptions,
    classify_changelog,
    normalize_changelog,
)
from .defaults import CONFIG_DIR, CONFIG_FILENAME, DEFAULT_WRITTEN_CONFIG
from .io import config_path, load_document, read, write_default_config
from .types import Config, ExperimentalOptions
from .validate import DEFAULT_CONFIG, RULES, FieldRule, assemble, parse, validate_config_api

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILENAME",
    "Config",
    "DEFAULT_CONFIG",
    "DEFAULT_WRITTEN_CONFIG",
    "Disabled",
    "ExperimentalOptions",
    "FieldRule",
    "RULES",
    "Reference",
    "ReferenceWithOptions",
    "assemble",
    "classify_changelog",
    "config_path",
    "load_document",
    "normalize_changelog",
    "parse",
    "read",
    "validate_config_api",
    "write_default_config",
]
