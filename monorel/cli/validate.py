"""CLI subcommand: validate — check the config document against the workspace.

Prints `OK` plus a one-line summary, or `CONFIG INVALID` followed by the full report.
With --json prints {"ok": bool, "errors": [...], "config": {...} | null}.
"""
from __future__ import annotations

import argparse

from ..config import parse
from ..errors import ConfigReadError, ValidationError, WorkspaceError, format_error
from ._common import load_inputs
from ._exit import OK, USER_ERR, VALIDATION_ERR
from ._io import eprint_once, print_json, set_verbosity
from ._util import add_common_subparser

_HELP = "Validate .changeset/config.json"
_DESC = "Validate the release config against the packages in the workspace"


def register(subparsers: argparse._SubParsersAction) -> None:
    sp = add_common_subparser(subparsers, name="validate", help_text=_HELP, description=_DESC)
    sp.set_defaults(command="validate", func=_run)


def _run(ns: argparse.Namespace) -> int:
    set_verbosity(ns.verbose, ns.quiet)
    try:
        raw, workspace = load_inputs(ns)
    except (ConfigReadError, WorkspaceError) as e:
        eprint_once(format_error(e))
        return USER_ERR

    try:
        cfg = parse(raw, workspace)
    except ValidationError as ve:
        if ns.json:
            print_json({"ok": False, "errors": ve.messages, "config": None})
        else:
            print("CONFIG INVALID\n" + str(ve))
        return VALIDATION_ERR

    if ns.json:
        print_json({"ok": True, "errors": [], "config": cfg.to_dict()})
        return OK

    print("OK")
    print(
        "packages={n} tool={tool} access={access} baseBranch={branch} linked_sets={linked} ignored={ignored}".format(
            n=len(workspace.packages),
            tool=workspace.tool,
            access=cfg.access,
            branch=cfg.base_branch,
            linked=len(cfg.linked),
            ignored=len(cfg.ignore),
        )
    )
    return OK
