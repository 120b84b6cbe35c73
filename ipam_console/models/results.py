"""Outcome of a single or batch mutation action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ipam_console.errors import ActionError


@dataclass(frozen=True, slots=True)
class ItemFailure:
    """One record a batch action could not process."""

    item_identifier: str
    error: str
    id: Optional[str] = None
    code: str = "ACTION_FAILED"
    field: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ActionResult:
    """
    `success` is True when at least one record was processed. Batch actions
    also report the records that failed.
    """

    success: bool
    error: Optional[ActionError] = None
    success_count: int = 0
    failures: Tuple[ItemFailure, ...] = ()

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def is_partial(self) -> bool:
        return self.success and bool(self.failures)

    # ------------- constructors -------------
    @classmethod
    def ok(cls, count: int = 1) -> "ActionResult":
        return cls(success=True, success_count=count)

    @classmethod
    def failed(cls, error: ActionError, failures: Sequence[ItemFailure] = ()) -> "ActionResult":
        return cls(success=False, error=error, failures=tuple(failures))

    @classmethod
    def from_batch(
        cls, success_count: int, failures: Sequence[ItemFailure], *, item_label: str = "record"
    ) -> "ActionResult":
        """Fold per-record outcomes into one result."""
        failures = tuple(failures)
        if success_count > 0:
            return cls(success=True, success_count=success_count, failures=failures)
        if len(failures) == 1:
            only = failures[0]
            return cls.failed(
                ActionError(code=only.code, user_message=only.error, field=only.field), failures
            )
        return cls.failed(
            ActionError(
                code="BATCH_FAILED",
                user_message=f"All {len(failures)} selected {item_label}s could not be processed.",
            ),
            failures,
        )
