"""Workspace model plus the default package-discovery and dependents-graph collaborators.

The config core only ever *receives* a :class:`Workspace` and a dependents
graph; the helpers here are the stock providers used by the CLI.

Discovery order for ``get_packages(cwd)``:
  1) ``pnpm-workspace.yaml`` -> tool "pnpm"
  2) ``package.json`` ``workspaces`` (list or ``{"packages": [...]}``) -> tool "yarn"
  3) ``lerna.json`` ``packages`` -> tool "lerna"
  4) otherwise the root package is the only package -> tool "root"
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from .errors import WorkspaceError

__all__ = [
    "DEPENDENCY_KINDS",
    "Package",
    "Workspace",
    "PLACEHOLDER_WORKSPACE",
    "get_packages",
    "get_dependents_graph",
]

logger = logging.getLogger(__name__)

DEPENDENCY_KINDS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


@dataclass(frozen=True)
class Package:
    dir: str
    package_json: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return str(self.package_json.get("name", ""))

    @property
    def version(self) -> str:
        return str(self.package_json.get("version", ""))


@dataclass(frozen=True)
class Workspace:
    root: Package
    tool: str
    packages: Tuple[Package, ...] = ()

    def package_names(self) -> List[str]:
        return [p.name for p in self.packages]


_FAKE_PACKAGE = Package(dir="", package_json={"name": "", "version": ""})

# Used to compute the default config without a real repository on disk.
PLACEHOLDER_WORKSPACE = Workspace(root=_FAKE_PACKAGE, tool="root", packages=(_FAKE_PACKAGE,))


# ---- discovery ------------------------------------------------------------

def _read_json(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise WorkspaceError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise WorkspaceError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise WorkspaceError(f"{path} must contain a JSON object")
    return data


def _load_package(directory: Path) -> Package:
    pkg_json = _read_json(directory / "package.json")
    if not isinstance(pkg_json.get("name"), str) or not pkg_json["name"]:
        raise WorkspaceError(f"{directory / 'package.json'} has no \"name\" field")
    return Package(dir=str(directory), package_json=pkg_json)


def _glob_list(value: Any, source: Path | str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise WorkspaceError(f"{source}: `packages` must be a list of glob strings, got {value!r}")
    return list(value)


def _workspace_globs(cwd: Path, root_json: Mapping[str, Any]) -> Tuple[str, Optional[List[str]]]:
    """Return (tool, globs) for the first workspace manifest found, or ("root", None)."""
    pnpm_file = cwd / "pnpm-workspace.yaml"
    if pnpm_file.is_file():
        try:
            data = yaml.safe_load(pnpm_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise WorkspaceError(f"{pnpm_file} is not valid YAML: {e}") from e
        if data is None:
            return "pnpm", []
        if not isinstance(data, Mapping):
            raise WorkspaceError(f"{pnpm_file} must contain a mapping with a `packages` list")
        return "pnpm", _glob_list(data.get("packages", []), pnpm_file)

    workspaces = root_json.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages", [])
    if workspaces is not None:
        return "yarn", _glob_list(workspaces, cwd / "package.json")

    lerna_file = cwd / "lerna.json"
    if lerna_file.is_file():
        lerna = _read_json(lerna_file)
        return "lerna", _glob_list(lerna.get("packages", ["packages/*"]), lerna_file)

    return "root", None


def _expand_globs(cwd: Path, globs: Sequence[str]) -> List[Path]:
    included: Dict[Path, None] = {}
    excluded = set()
    for pattern in globs:
        negate = pattern.startswith("!")
        pattern = pattern[1:] if negate else pattern
        while pattern.startswith("./"):
            pattern = pattern[2:]
        pattern = pattern.rstrip("/")
        # The root package is Workspace.root, never one of the packages
        if pattern in ("", "."):
            continue
        try:
            matches = sorted(cwd.glob(pattern))
        except (ValueError, IndexError, NotImplementedError) as e:
            raise WorkspaceError(f"unsupported workspace glob {pattern!r}: {e}") from e
        for match in matches:
            if not (match / "package.json").is_file():
                continue
            if negate:
                excluded.add(match.resolve())
            else:
                included[match.resolve()] = None
    return sorted(p for p in included if p not in excluded)


def get_packages(cwd: Path | str) -> Workspace:
    """Discover the packages of the monorepo rooted at ``cwd``."""
    cwd = Path(cwd).resolve()
    root = _load_package(cwd)
    tool, globs = _workspace_globs(cwd, root.package_json)
    if globs is None:
        logger.debug("no workspace manifest under %s; single-package repo", cwd)
        return Workspace(root=root, tool=tool, packages=(root,))

    packages = [_load_package(d) for d in _expand_globs(cwd, globs)]
    seen: Dict[str, str] = {}
    for pkg in packages:
        if pkg.name in seen:
            raise WorkspaceError(
                f'package name "{pkg.name}" is used by both {seen[pkg.name]} and {pkg.dir}'
            )
        seen[pkg.name] = pkg.dir
    logger.debug("discovered %d packages (tool=%s) under %s", len(packages), tool, cwd)
    return Workspace(root=root, tool=tool, packages=tuple(packages))


# ---- dependents graph -----------------------------------------------------

def get_dependents_graph(workspace: Workspace) -> Dict[str, List[str]]:
    """Map each package name to the workspace packages that depend on it.

    Every dependency kind counts. Version ranges are not checked.
    """
    names = set(workspace.package_names())
    graph: Dict[str, List[str]] = {name: [] for name in workspace.package_names()}
    for pkg in workspace.packages:
        for kind in DEPENDENCY_KINDS:
            deps = pkg.package_json.get(kind) or {}
            if not isinstance(deps, Mapping):
                continue
            for dep_name in deps:
                if dep_name == pkg.name or dep_name not in names:
                    continue
                dependents = graph[dep_name]
                if pkg.name not in dependents:
                    dependents.append(pkg.name)
    return graph
