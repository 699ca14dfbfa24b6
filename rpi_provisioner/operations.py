from __future__ import annotations

import dataclasses
import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from .console import StatusConsole
from .errors import PreconditionError, ProvisionError

logger = logging.getLogger(__name__)

Action = Callable[[], object]


@dataclass(frozen=True)
class OperationResult:
    succeeded: bool
    description: str
    timestamp: datetime
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class Operation:
    """One side-effecting action.

    The action raises on failure; its return value is ignored.
    """

    description: str
    action: Action
    group: str = ""

    def execute(self) -> OperationResult:
        try:
            self.action()
        except PreconditionError:
            raise
        except ProvisionError as e:
            logger.error("ERROR in %s: %s: %s", self.group or "-", self.description, e)
            return OperationResult(False, self.description, datetime.now(), e)
        except Exception as e:
            logger.exception("Unexpected failure in %s: %s", self.group or "-", self.description)
            return OperationResult(False, self.description, datetime.now(), e)
        return OperationResult(True, self.description, datetime.now())


def chain(*actions: Action) -> Action:
    """Compose actions into one that stops at the first failure."""

    def _run() -> None:
        for a in actions:
            a()

    return _run


class GroupStatus(str, enum.Enum):
    ALL_SUCCEEDED = "all_succeeded"
    PARTIAL = "partial"
    ALL_FAILED = "all_failed"


@dataclass(frozen=True)
class GroupOutcome:
    group_id: str
    expected_count: int
    succeeded_count: int
    results: Tuple[OperationResult, ...] = ()
    qualified_threshold: Optional[int] = None

    @property
    def status(self) -> GroupStatus:
        # 0/0 counts as success.
        if self.succeeded_count == self.expected_count:
            return GroupStatus.ALL_SUCCEEDED
        if self.succeeded_count == 0:
            return GroupStatus.ALL_FAILED
        return GroupStatus.PARTIAL

    @property
    def failed_count(self) -> int:
        return self.expected_count - self.succeeded_count

    @property
    def qualified_success(self) -> bool:
        if self.status is GroupStatus.ALL_SUCCEEDED:
            return True
        return self.qualified_threshold is not None and self.succeeded_count >= self.qualified_threshold


@dataclass
class OperationGroup:
    """A named, ordered bundle of operations executed together.

    execute() never aborts early: every operation runs, failures are only
    counted. qualified_threshold lets a group report success once that many
    operations succeeded; the strict status is unaffected.
    """

    group_id: str
    title: str
    operations: List[Operation] = field(default_factory=list)
    qualified_threshold: Optional[int] = None
    notes: Sequence[str] = ()
    succeeded_count: int = 0

    def __post_init__(self) -> None:
        self.operations = [
            op if op.group == self.group_id else dataclasses.replace(op, group=self.group_id)
            for op in self.operations
        ]

    @property
    def expected_count(self) -> int:
        return len(self.operations)

    def execute(self, console: StatusConsole) -> GroupOutcome:
        console.header(self.title)
        logger.info("Running group %s (%s operations)", self.group_id, self.expected_count)

        self.succeeded_count = 0
        results: List[OperationResult] = []
        for op in self.operations:
            result = op.execute()
            results.append(result)
            if result.succeeded:
                self.succeeded_count += 1

        outcome = GroupOutcome(
            group_id=self.group_id,
            expected_count=self.expected_count,
            succeeded_count=self.succeeded_count,
            results=tuple(results),
            qualified_threshold=self.qualified_threshold,
        )
        self._report(outcome, console)
        return outcome

    def _report(self, outcome: GroupOutcome, console: StatusConsole) -> None:
        logger.info(
            "Group %s finished: %s (%s/%s succeeded)",
            self.group_id,
            outcome.status.value,
            outcome.succeeded_count,
            outcome.expected_count,
        )
        if outcome.status is GroupStatus.ALL_SUCCEEDED:
            console.success(f"{self.title} completed successfully!")
        elif outcome.qualified_success:
            console.success(
                f"{self.title} completed ({outcome.succeeded_count}/{outcome.expected_count} succeeded)"
            )
        elif outcome.status is GroupStatus.PARTIAL:
            console.warning(f"{self.title} completed with {outcome.failed_count} failures")
        else:
            console.error(f"{self.title} failed: none of {outcome.expected_count} operations succeeded")

        if outcome.qualified_success:
            for note in self.notes:
                console.info(note)
