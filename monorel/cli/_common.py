from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Dict, Tuple

from ..config import load_document
from ..errors import ConfigReadError
from ..workspace import Workspace, get_packages
from ._config import DEFAULT_REL, discover_config_path, maybe_log_selected


def load_inputs(ns: argparse.Namespace) -> Tuple[Dict[str, Any], Workspace]:
    """Locate and decode the config document, then discover the workspace under --cwd."""
    cwd = Path(ns.cwd).resolve()
    selected, source = discover_config_path(ns.config, cwd, os.environ)
    maybe_log_selected(selected, source, verbose=ns.verbose)
    if selected is None or source == "explicit-missing":
        raise ConfigReadError(f"config file not found: {selected or cwd / DEFAULT_REL}")
    raw = load_document(selected)
    return raw, get_packages(cwd)
