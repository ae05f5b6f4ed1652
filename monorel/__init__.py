"""monorel: release config validation for JavaScript monorepos.

Only `monorel` and `monorel.errors` are public. Everything else is internal.
"""
from __future__ import annotations

from typing import Any as _Any

from . import errors as errors  # re-export for star-import; noqa: F401
from ._version import __version__


def __getattr__(name: str) -> _Any:  # PEP 562 lazy exports to avoid import-time cycles
    if name in ("parse", "read", "validate_config_api", "Config", "DEFAULT_CONFIG"):
        from . import config as _config

        value = getattr(_config, name)
        globals()[name] = value
        return value
    if name in ("Package", "Workspace", "get_packages", "get_dependents_graph"):
        from . import workspace as _workspace

        value = getattr(_workspace, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return list(__all__)


# Star-export surface (deterministic ordering).
__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "Package",
    "Workspace",
    "__version__",
    "errors",
    "get_dependents_graph",
    "get_packages",
    "parse",
    "read",
    "validate_config_api",
]
