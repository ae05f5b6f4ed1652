"""CLI subcommand: show — print the resolved config (YAML by default, --json for compact JSON)."""
from __future__ import annotations

import argparse

from ..config import parse
from ..errors import ConfigReadError, ValidationError, WorkspaceError, format_error
from ._common import load_inputs
from ._exit import OK, USER_ERR, VALIDATION_ERR
from ._io import eprint_once, print_json, print_yaml, set_verbosity
from ._util import add_common_subparser

_HELP = "Print the resolved config"
_DESC = "Print the config with every default filled in"


def register(subparsers: argparse._SubParsersAction) -> None:
    sp = add_common_subparser(subparsers, name="show", help_text=_HELP, description=_DESC)
    sp.set_defaults(command="show", func=_run)


def _run(ns: argparse.Namespace) -> int:
    set_verbosity(ns.verbose, ns.quiet)
    try:
        raw, workspace = load_inputs(ns)
        cfg = parse(raw, workspace)
    except (ConfigReadError, WorkspaceError) as e:
        eprint_once(format_error(e))
        return USER_ERR
    except ValidationError as ve:
        eprint_once(str(ve))
        return VALIDATION_ERR

    if ns.json:
        print_json(cfg.to_dict())
    else:
        print_yaml(cfg.to_dict())
    return OK
