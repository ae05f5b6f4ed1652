# tests/conftest.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

import pytest

from monorel.workspace import Package, Workspace


def _write_json(path: Path, obj: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def make_workspace():
    """Build an in-memory Workspace; ``deps`` maps a package to the packages it depends on."""

    def _make(*names: str, deps: Optional[Mapping[str, Iterable[str]]] = None) -> Workspace:
        deps = deps or {}
        packages = tuple(
            Package(
                dir=f"/repo/packages/{name}",
                package_json={
                    "name": name,
                    "version": "1.0.0",
                    "dependencies": {d: "^1.0.0" for d in deps.get(name, ())},
                },
            )
            for name in names
        )
        root = Package(dir="/repo", package_json={"name": "monorepo-root", "version": "0.0.0"})
        return Workspace(root=root, tool="yarn", packages=packages)

    return _make


@pytest.fixture
def make_repo(tmp_path: Path):
    """Lay out a yarn-style monorepo on disk under tmp_path.

    ``packages`` maps package name -> extra package.json fields.
    ``config`` (if given) is written to .changeset/config.json.
    """

    def _make(
        packages: Mapping[str, Dict[str, Any]],
        config: Optional[Any] = None,
    ) -> Path:
        _write_json(
            tmp_path / "package.json",
            {"name": "monorepo-root", "version": "0.0.0", "private": True, "workspaces": ["packages/*"]},
        )
        for name, extra in packages.items():
            _write_json(
                tmp_path / "packages" / name / "package.json",
                {"name": name, "version": "1.0.0", **extra},
            )
        if config is not None:
            _write_json(tmp_path / ".changeset" / "config.json", config)
        return tmp_path

    return _make
