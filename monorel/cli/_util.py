from __future__ import annotations

import argparse

__all__ = ["add_common_subparser"]


def add_common_subparser(
    subparsers: argparse._SubParsersAction,
    name: str,
    help_text: str,
    description: str,
) -> argparse.ArgumentParser:
    """
    Create a subparser with the flags shared by every command:

    - --cwd: repository root (defaults to the current directory)
    - -c/--config: explicit config document
    - --json: machine-readable JSON output
    - --quiet / --verbose: control stderr verbosity; stdout remains reserved for command output
    """
    sp = subparsers.add_parser(name, help=help_text, description=description)
    sp.add_argument("--cwd", default=".", help="repository root (default: current directory)")
    sp.add_argument(
        "-c",
        "--config",
        dest="config",
        help="config file or directory (default: .changeset/config.json under --cwd)",
    )
    sp.add_argument("--json", action="store_true", help="JSON output (stable, machine-readable)")
    verbosity = sp.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", action="store_true", help="suppress non-essential stderr")
    verbosity.add_argument("--verbose", action="store_true", help="increase stderr verbosity")
    return sp
