from __future__ import annotations

import json
import logging
import sys
from typing import Any

import yaml

# Verbosity gates
VERBOSE = False
QUIET = False


def set_verbosity(verbose: bool = False, quiet: bool = False) -> None:
    """Set the stderr gates and configure logging to match (once per process)."""
    global VERBOSE, QUIET
    VERBOSE, QUIET = bool(verbose), bool(quiet)
    if QUIET:
        level = logging.ERROR
    elif VERBOSE:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(stream=sys.stderr, format="%(levelname)s: %(message)s")
    logging.getLogger("monorel").setLevel(level)


def eprint_once(msg: str) -> None:
    if not QUIET:
        print(msg, file=sys.stderr)


def print_json(obj: Any = None) -> None:
    """Dump obj using compact, stable separators (no color)."""
    sys.stdout.write(json.dumps(obj, separators=(",", ":")) + "\n")


def print_yaml(obj: Any) -> None:
    sys.stdout.write(yaml.safe_dump(obj, sort_keys=False, default_flow_style=False))
