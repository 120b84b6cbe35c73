# ipam_console/services/resource_service.py
"""
Business-logic layer behind the list screens. Exposes the async fetch and
mutation actions the controllers consume and turns storage errors into the
structured failures those actions promise.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, TypeVar

from ipam_console.db.repos.base_repo import TableRepo
from ipam_console.errors import ActionError, ConsoleError, RemoteFailure
from ipam_console.models.pagination import PaginatedResult
from ipam_console.models.query import Query
from ipam_console.models.results import ActionResult, ItemFailure
from simple_logger import Slogger

M = TypeVar("M")

AuditHook = Callable[[str, str], Any]


class ResourceService(Generic[M]):
    """Handles the list/delete/update use-cases of one resource."""

    def __init__(
        self,
        repo: TableRepo[M],
        *,
        item_label: str = "record",
        audit: Optional[AuditHook] = None,
    ) -> None:
        self._repo = repo
        self.item_label = item_label
        self._audit = audit

    # --------------------------------------------------------------------- #
    # read side
    # --------------------------------------------------------------------- #

    async def fetch(self, query: Query) -> PaginatedResult[M]:
        """Return the requested page; the page number is echoed even past the end."""
        try:
            records = self._repo.list(page=query.page, per_page=query.page_size, filters=query.filters)
            total = self._repo.count(query.filters)
        except sqlite3.Error as e:
            Slogger.exception(e, f"Could not list {self.item_label}s", {"page": query.page})
            raise RemoteFailure(
                ActionError(code="DATABASE_ERROR", user_message=f"Could not load {self.item_label}s. Please try again.")
            ) from e
        return PaginatedResult.build(records, total, query.page, query.page_size)

    def by_id(self, record_id: str) -> Optional[M]:
        return self._repo.by_id(record_id)

    # --------------------------------------------------------------------- #
    # write side
    # --------------------------------------------------------------------- #

    async def delete(self, record_ids: Sequence[str]) -> ActionResult:
        """Delete each record, collecting per-record failures."""
        return self._each(record_ids, "delete", self._repo.delete)

    async def update(self, record_ids: Sequence[str], changes: Mapping[str, Any]) -> ActionResult:
        """Apply the same partial update to each record."""
        if not changes:
            return ActionResult.failed(
                ActionError(code="VALIDATION_ERROR", user_message="There is nothing to update.")
            )
        return self._each(record_ids, "update", lambda record_id: self._repo.update(record_id, changes))

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _each(self, record_ids: Sequence[str], verb: str, apply: Callable[[str], bool]) -> ActionResult:
        if not record_ids:
            return ActionResult.failed(
                ActionError(code="VALIDATION_ERROR", user_message=f"No {self.item_label}s were selected.")
            )

        succeeded = 0
        failures: List[ItemFailure] = []
        for record_id in record_ids:
            label = self._label(record_id)
            try:
                if apply(record_id):
                    succeeded += 1
                    self._record_audit(f"{verb}_{self.item_label.replace(' ', '_')}", f"{verb.capitalize()}d {label}")
                else:
                    failures.append(ItemFailure(
                        item_identifier=label,
                        error=f"The {self.item_label} no longer exists. It may already have been removed.",
                        id=record_id,
                        code="NOT_FOUND",
                    ))
            except ConsoleError as e:
                failures.append(ItemFailure(
                    item_identifier=label, error=e.user_message, id=record_id, code=e.code, field=e.field,
                ))
            except sqlite3.IntegrityError as e:
                Slogger.exception(e, f"Constraint violation during {verb}", {"id": record_id})
                failures.append(ItemFailure(
                    item_identifier=label,
                    error=f"The {self.item_label} is still referenced by other records.",
                    id=record_id,
                    code="CONSTRAINT_VIOLATION",
                ))
            except (sqlite3.Error, ValueError) as e:
                Slogger.exception(e, f"Could not {verb} {label}", {"id": record_id})
                failures.append(ItemFailure(
                    item_identifier=label,
                    error=f"The {self.item_label} could not be {verb}d.",
                    id=record_id,
                    code="DATABASE_ERROR",
                ))

        Slogger.info(
            f"ResourceService.{verb}: {succeeded} succeeded, {len(failures)} failed",
            {"item": self.item_label},
        )
        return ActionResult.from_batch(succeeded, failures, item_label=self.item_label)

    def _label(self, record_id: str) -> str:
        try:
            record = self._repo.by_id(record_id)
        except sqlite3.Error:
            record = None
        return getattr(record, "label", None) or record_id

    def _record_audit(self, action: str, details: str) -> None:
        if self._audit is None:
            return
        try:
            self._audit(action, details)
        except sqlite3.Error as e:
            # the mutation itself already succeeded
            Slogger.exception(e, "Could not write audit entry", {"action": action})
