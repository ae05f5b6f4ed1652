"""CLI subcommand: init — write the default config document."""
from __future__ import annotations

import argparse

from ..config import write_default_config
from ..errors import ConfigReadError, format_error
from ._exit import OK, USER_ERR
from ._io import eprint_once, print_json, set_verbosity
from ._util import add_common_subparser

_HELP = "Create .changeset/config.json with the defaults"
_DESC = "Write the default release config; an existing file is left untouched"


def register(subparsers: argparse._SubParsersAction) -> None:
    sp = add_common_subparser(subparsers, name="init", help_text=_HELP, description=_DESC)
    sp.set_defaults(command="init", func=_run)


def _run(ns: argparse.Namespace) -> int:
    set_verbosity(ns.verbose, ns.quiet)
    try:
        path = write_default_config(ns.cwd)
    except ConfigReadError as e:
        eprint_once(format_error(e))
        return USER_ERR
    if ns.json:
        print_json({"path": str(path)})
    else:
        print(f"Created {path}")
    return OK
