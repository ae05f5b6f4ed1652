# monorel/cli/main.py
from __future__ import annotations

import argparse
import sys
from typing import List

from ..errors import CLIError, MonorelError, format_error
from . import init_cmd, show, validate
from ._exit import INTERNAL
from ._io import eprint_once


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monorel",
        description="Release config tooling for JavaScript monorepos",
        allow_abbrev=False,
    )
    from monorel import __version__ as _VER

    parser.add_argument("--version", action="version", version=f"monorel {_VER}")
    subparsers = parser.add_subparsers(dest="command")

    validate.register(subparsers)
    show.register(subparsers)
    init_cmd.register(subparsers)

    return parser


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    ns = parser.parse_args(argv)
    if not hasattr(ns, "func"):
        parser.print_help(sys.stderr)
        return 2
    try:
        return ns.func(ns)
    except MonorelError as e:
        eprint_once(format_error(e))
        return INTERNAL
    except Exception as e:
        eprint_once(format_error(CLIError(f"unexpected {type(e).__name__}: {e}")))
        return INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
