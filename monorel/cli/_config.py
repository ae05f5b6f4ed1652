from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional, TextIO, Tuple

from ..config.defaults import CONFIG_DIR, CONFIG_FILENAME

# Relative default searched under the repository root
DEFAULT_REL = Path(CONFIG_DIR) / CONFIG_FILENAME
ENV_VAR = "MONOREL_CONFIG"


def _coerce_candidate(p: Path) -> Optional[Path]:
    """Return a concrete config file path if the candidate exists.

    Accepts a file path *or* a directory; directories are resolved to
    "config.json" inside that directory.
    """
    if p.is_dir():
        p = p / CONFIG_FILENAME
    if p.is_file():
        return p.resolve()
    return None


def discover_config_path(
    explicit: Optional[str],
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Tuple[Optional[Path], str]:
    """Deterministic config discovery.

    Order (only when `explicit`/`--config` is not provided):
      1) $MONOREL_CONFIG (file or dir -> config.json)
      2) <cwd>/.changeset/config.json

    Returns (selected_path or None, source_tag). Source tags: 'explicit',
    'explicit-missing', 'env:MONOREL_CONFIG', 'cwd:.changeset/config.json', 'none'.
    """
    cwd = cwd or Path.cwd()
    env = dict(env or {})

    # explicit --config always wins; allow reporting even if missing
    if explicit:
        expanded = Path(os.path.expandvars(explicit)).expanduser()
        sel = _coerce_candidate(expanded)
        if sel is not None:
            return sel, "explicit"
        return expanded, "explicit-missing"

    cenv = env.get(ENV_VAR)
    if cenv:
        sel = _coerce_candidate(Path(os.path.expandvars(cenv)).expanduser())
        if sel is not None:
            return sel, f"env:{ENV_VAR}"

    sel = _coerce_candidate(cwd / DEFAULT_REL)
    if sel is not None:
        return sel, f"cwd:{DEFAULT_REL.as_posix()}"

    return None, "none"


def maybe_log_selected(
    path: Optional[Path], source: str, *, verbose: bool = False, stream: Optional[TextIO] = None
) -> None:
    """Emit a one-line message about the selected config when verbose (stderr by default)."""
    if not verbose:
        return
    if stream is None:
        stream = sys.stderr
    stream.write(f"[monorel] config: selected={path if path else 'none'} (source={source})\n")
    stream.flush()


__all__ = [
    "DEFAULT_REL",
    "ENV_VAR",
    "discover_config_path",
    "maybe_log_selected",
]
