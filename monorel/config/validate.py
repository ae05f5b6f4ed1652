"""
Validation and normalization of the release config document.

Public API:
    parse(raw, workspace) -> Config
    validate_config_api(raw, workspace) -> (ok, messages, config_or_none)
    assemble(raw, normalized_access) -> Config
    DEFAULT_CONFIG

- Every check runs; problems are collected and raised once as ValidationError.
- The legacy `access: "private"` value is rewritten to "restricted" with a warning.
- Unknown top-level keys are warned about (with a did-you-mean hint) and ignored.
- The input mapping is not mutated.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from ..errors import ValidationError
from ..workspace import PLACEHOLDER_WORKSPACE, Workspace, get_dependents_graph
from .changelog import classify_changelog, normalize_changelog
from .defaults import (
    ALLOWED_ACCESS,
    ALLOWED_TOP,
    ALLOWED_UPDATE_INTERNAL_DEPENDENCIES,
    DEFAULT_WRITTEN_CONFIG,
    EXPERIMENTAL_FLAGS,
    EXPERIMENTAL_KEY,
    LEGACY_ACCESS,
)
from .types import Config, ExperimentalOptions

__all__ = [
    "FieldRule",
    "RULES",
    "DEFAULT_CONFIG",
    "assemble",
    "parse",
    "validate_config_api",
]

logger = logging.getLogger(__name__)

WarnFn = Callable[[str], None]
GraphFn = Callable[[Workspace], Mapping[str, Sequence[str]]]

_MISSING = object()


# ------------------------------
# Utilities
# ------------------------------

def _dump(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, ensure_ascii=False, default=repr)
    except (TypeError, ValueError):
        return repr(value)


def _lev(a: str, b: str) -> int:
    """Tiny Levenshtein distance (edit distance) for did-you-mean suggestions."""
    la, lb = len(a), len(b)
    dp = list(range(lb + 1))
    for i, ca in enumerate(a, 1):
        prev = dp[0]
        dp[0] = i
        for j, cb in enumerate(b, 1):
            ins = dp[j] + 1
            dele = dp[j - 1] + 1
            sub = prev + (0 if ca == cb else 1)
            prev, dp[j] = dp[j], min(ins, dele, sub)
    return dp[-1]


def _suggest_key(bad: str, allowed: Set[str]) -> str | None:
    """Return closest allowed key within distance <=2, else None."""
    best_key, best_dist = None, 99
    for k in sorted(allowed):
        d = _lev(bad, k)
        if d < best_dist:
            best_key, best_dist = k, d
    return best_key if best_dist <= 2 else None


# ------------------------------
# Predicates
# ------------------------------

def _is_bool(v: Any) -> bool:
    return isinstance(v, bool)


def _is_str(v: Any) -> bool:
    return isinstance(v, str)


def _is_str_list(v: Any) -> bool:
    return isinstance(v, (list, tuple)) and all(isinstance(x, str) for x in v)


def _is_linked(v: Any) -> bool:
    return isinstance(v, (list, tuple)) and all(_is_str_list(group) for group in v)


def _one_of(*allowed: str) -> Callable[[Any], bool]:
    return lambda v: isinstance(v, str) and v in allowed


# ------------------------------
# Cross-checks against the workspace
# ------------------------------

class _Context:
    """Per-call view of the workspace; the dependents graph is built on first use."""

    def __init__(self, workspace: Workspace, graph_fn: GraphFn):
        self.workspace = workspace
        self._graph_fn = graph_fn
        self._names: Optional[Set[str]] = None
        self._graph: Optional[Mapping[str, Sequence[str]]] = None

    @property
    def package_names(self) -> Set[str]:
        if self._names is None:
            self._names = {p.package_json.get("name") for p in self.workspace.packages}
        return self._names

    def dependents_graph(self) -> Mapping[str, Sequence[str]]:
        if self._graph is None:
            self._graph = self._graph_fn(self.workspace)
        return self._graph


def _check_linked(groups: Sequence[Sequence[str]], ctx: _Context) -> List[str]:
    messages: List[str] = []
    found: Set[str] = set()
    duplicated: Dict[str, None] = {}
    for group in groups:
        in_group: Set[str] = set()
        for name in group:
            if name not in ctx.package_names:
                messages.append(
                    f'The package "{name}" is specified in the `linked` option but it is not found '
                    "in the project. You may have misspelled the package name."
                )
            if name in found and name not in in_group:
                duplicated[name] = None
            found.add(name)
            in_group.add(name)
    for name in duplicated:
        messages.append(
            f'The package "{name}" is in multiple sets of linked packages. '
            "Packages can only be in a single set of linked packages."
        )
    return messages


def _check_ignore(ignored: Sequence[str], ctx: _Context) -> List[str]:
    messages: List[str] = []
    for name in ignored:
        if name not in ctx.package_names:
            messages.append(
                f'The package "{name}" is specified in the `ignore` option but it is not found '
                "in the project. You may have misspelled the package name."
            )
    if not ignored:
        return messages

    # Ignoring a package means ignoring everything that depends on it
    graph = ctx.dependents_graph()
    ignored_set = set(ignored)
    for ignored_pkg in ignored:
        for dependent in graph.get(ignored_pkg) or ():
            if dependent not in ignored_set:
                messages.append(
                    f'The package "{dependent}" depends on the ignored package "{ignored_pkg}", '
                    f'but "{dependent}" is not being ignored. '
                    f'Please add "{dependent}" to the `ignore` option.'
                )
    return messages


# ------------------------------
# Rule table
# ------------------------------

@dataclass(frozen=True)
class FieldRule:
    """One recognized option.

    ``path`` locates the value in the document; ``accepts`` is the shape check;
    ``message`` is formatted with ``key`` and ``value`` (indented JSON) when the
    shape check fails; ``cross_check`` runs only for well-shaped values.
    """

    path: Tuple[str, ...]
    accepts: Callable[[Any], bool]
    message: str
    cross_check: Optional[Callable[[Any, _Context], List[str]]] = None

    @property
    def key(self) -> str:
        return self.path[-1]

    def lookup(self, doc: Mapping[str, Any]) -> Any:
        node: Any = doc
        for part in self.path:
            if not isinstance(node, Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def check(self, doc: Mapping[str, Any], ctx: _Context) -> List[str]:
        value = self.lookup(doc)
        if value is _MISSING:
            return []
        if not self.accepts(value):
            return [self.message.format(key=self.key, value=_dump(value))]
        if self.cross_check is not None:
            return self.cross_check(value, ctx)
        return []


_BOOL_MSG = "The `{key}` option is set as {value} when the only valid values are omitted or a boolean"

RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        ("changelog",),
        lambda v: classify_changelog(v) is not None,
        "The `{key}` option is set as {value} when the only valid values are omitted, "
        'a module path (e.g. "@changesets/cli/changelog" or "./some-module") or a tuple with '
        "a module path and config for the changelog generator "
        '(e.g. ["@changesets/cli/changelog", {{ "someOption": true }}])',
    ),
    FieldRule(
        ("access",),
        _one_of(*ALLOWED_ACCESS),
        'The `{key}` option is set as {value} when the only valid values are omitted, "public" or "restricted"',
    ),
    FieldRule(("commit",), _is_bool, _BOOL_MSG),
    FieldRule(
        ("baseBranch",),
        _is_str,
        "The `{key}` option is set as {value} but the `{key}` option can only be set as a string",
    ),
    FieldRule(
        ("linked",),
        _is_linked,
        "The `{key}` option is set as {value} when the only valid values are omitted "
        "or an array of arrays of package names",
        _check_linked,
    ),
    FieldRule(
        ("updateInternalDependencies",),
        _one_of(*ALLOWED_UPDATE_INTERNAL_DEPENDENCIES),
        "The `{key}` option is set as {value} but can only be 'patch' or 'minor'",
    ),
    FieldRule(
        ("ignore",),
        _is_str_list,
        "The `{key}` option is set as {value} when the only valid values are omitted "
        "or an array of package names",
        _check_ignore,
    ),
    FieldRule(
        (EXPERIMENTAL_KEY,),
        lambda v: isinstance(v, Mapping),
        "The `{key}` option is set as {value} when the only valid values are omitted or an object",
    ),
) + tuple(FieldRule((EXPERIMENTAL_KEY, flag), _is_bool, _BOOL_MSG) for flag in EXPERIMENTAL_FLAGS)


# ------------------------------
# Assembler
# ------------------------------

def assemble(raw: Mapping[str, Any], normalized_access: Optional[str]) -> Config:
    """Merge a validated document over the defaults. Cannot fail once validation has passed."""

    def pick(key: str) -> Any:
        return raw[key] if key in raw else DEFAULT_WRITTEN_CONFIG[key]

    experimental = raw.get(EXPERIMENTAL_KEY)
    if not isinstance(experimental, Mapping):
        experimental = {}

    return Config(
        changelog=normalize_changelog(pick("changelog")),
        access=DEFAULT_WRITTEN_CONFIG["access"] if normalized_access is None else normalized_access,
        commit=pick("commit"),
        linked=tuple(tuple(group) for group in pick("linked")),
        base_branch=pick("baseBranch"),
        update_internal_dependencies=pick("updateInternalDependencies"),
        ignore=tuple(pick("ignore")),
        experimental=ExperimentalOptions(
            only_update_peer_dependents_when_out_of_range=experimental.get(
                "onlyUpdatePeerDependentsWhenOutOfRange", False
            ),
            use_calculated_version_for_snapshots=experimental.get(
                "useCalculatedVersionForSnapshots", False
            ),
        ),
    )


# ------------------------------
# Main validator
# ------------------------------

def parse(
    raw: Mapping[str, Any],
    workspace: Workspace,
    *,
    dependents_graph: GraphFn = get_dependents_graph,
    warn: Optional[WarnFn] = None,
) -> Config:
    """
    Validate ``raw`` against ``workspace`` and return the resolved Config.

    Raises ValidationError listing every problem found, in check order.
    ``dependents_graph`` is only called when a non-empty `ignore` list is well-shaped.
    """
    warn = warn or logger.warning

    if not isinstance(raw, Mapping):
        raise ValidationError(
            [f"The config is set as {_dump(raw)} when the only valid value is an object"]
        )

    for k in raw.keys():
        if k not in ALLOWED_TOP:
            sug = _suggest_key(str(k), ALLOWED_TOP)
            hint = f" (did you mean `{sug}`?)" if sug else ""
            warn(f"The `{k}` option is not recognized and will be ignored{hint}.")

    doc = dict(raw)
    access = doc.get("access")
    if isinstance(access, str) and access in LEGACY_ACCESS:
        doc["access"] = LEGACY_ACCESS[access]
        warn(
            f'The `access` option is set as "{access}", but this is actually not a valid value '
            f'- the correct form is "{doc["access"]}".'
        )

    ctx = _Context(workspace, dependents_graph)
    errors: List[str] = []
    for rule in RULES:
        errors.extend(rule.check(doc, ctx))

    # If we collected errors, raise a single ValidationError with all messages (stable order)
    if errors:
        raise ValidationError(errors)

    return assemble(raw, doc.get("access"))


def validate_config_api(
    raw: Mapping[str, Any],
    workspace: Workspace,
    **kwargs: Any,
) -> Tuple[bool, List[str], Optional[Config]]:
    """Non-raising form of :func:`parse`.

    - On success: (True, [], config)
    - On validation error: (False, [messages...], None)
    """
    try:
        return True, [], parse(raw, workspace, **kwargs)
    except ValidationError as e:
        return False, list(e.messages), None


DEFAULT_CONFIG: Config = parse(DEFAULT_WRITTEN_CONFIG, PLACEHOLDER_WORKSPACE)
