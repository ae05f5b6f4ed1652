from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .changelog import ResolvedChangelog
from .defaults import EXPERIMENTAL_KEY


@dataclass(frozen=True)
class ExperimentalOptions:
    only_update_peer_dependents_when_out_of_range: bool = False
    use_calculated_version_for_snapshots: bool = False


@dataclass(frozen=True)
class Config:
    """Fully-defaulted release configuration.

    Field names are the snake_case forms of the document keys; ``to_dict``
    renders the document-shaped (camelCase) view.
    """

    changelog: ResolvedChangelog
    access: str
    commit: bool
    linked: Tuple[Tuple[str, ...], ...]
    base_branch: str
    update_internal_dependencies: str
    ignore: Tuple[str, ...]
    experimental: ExperimentalOptions = field(default_factory=ExperimentalOptions)

    # changelog options are the document's own object and may be unhashable
    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "changelog": list(self.changelog) if self.changelog else False,
            "access": self.access,
            "commit": self.commit,
            "linked": [list(group) for group in self.linked],
            "baseBranch": self.base_branch,
            "updateInternalDependencies": self.update_internal_dependencies,
            "ignore": list(self.ignore),
            EXPERIMENTAL_KEY: {
                "onlyUpdatePeerDependentsWhenOutOfRange": self.experimental.only_update_peer_dependents_when_out_of_range,
                "useCalculatedVersionForSnapshots": self.experimental.use_calculated_version_for_snapshots,
            },
        }
