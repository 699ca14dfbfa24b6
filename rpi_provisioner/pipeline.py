from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Mapping, Optional

from .console import StatusConsole
from .operations import GroupOutcome, OperationGroup

logger = logging.getLogger(__name__)

CANONICAL_ORDER = (
    "update",
    "essentials",
    "configuration",
    "monitoring",
    "network_tools",
    "database",
    "gps",
)


@dataclass(frozen=True)
class Selection:
    """Which groups to run. group_ids=None means every group."""

    group_ids: Optional[FrozenSet[str]] = None

    @classmethod
    def all(cls) -> "Selection":
        return cls(None)

    @classmethod
    def single(cls, group_id: str) -> "Selection":
        return cls(frozenset([group_id]))

    @classmethod
    def subset(cls, group_ids: Iterable[str]) -> "Selection":
        return cls(frozenset(group_ids))

    @property
    def is_all(self) -> bool:
        return self.group_ids is None


def resolve_selection(selection: Selection) -> List[str]:
    """Map a selection to the group ids to run, always in canonical order."""

    if selection.is_all:
        return list(CANONICAL_ORDER)
    unknown = sorted(set(selection.group_ids or ()) - set(CANONICAL_ORDER))
    if unknown:
        raise ValueError(f"Unknown group(s): {', '.join(unknown)}")
    return [g for g in CANONICAL_ORDER if g in (selection.group_ids or ())]


def run_selection(
    selection: Selection,
    groups: Mapping[str, OperationGroup],
    console: StatusConsole,
) -> List[GroupOutcome]:
    """Run selected groups in order. Groups are independent; nothing is rolled up."""

    outcomes: List[GroupOutcome] = []
    for group_id in resolve_selection(selection):
        group = groups.get(group_id)
        if group is None:
            raise KeyError(f"No group registered for {group_id}")
        logger.info("Running group %s", group_id)
        outcomes.append(group.execute(console))
    return outcomes
