# ipam_console/core/mutations.py
"""
Single and batch mutations followed by a reconciling refetch.

After a successful mutation the same page is fetched again. When that page
came back empty because its last records were just removed, the user is
moved back to the last page that still exists and it is fetched once more.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ipam_console.core.entity_controller import EntityManagementController
from ipam_console.core.navigator import PageNavigator
from ipam_console.errors import (
    ActionError,
    AuthorizationDenied,
    ConsoleError,
    RemoteFailure,
    UnexpectedClientError,
    ValidationError,
    describe_error,
    to_action_error,
)
from ipam_console.models.results import ActionResult, ItemFailure
from simple_logger import Slogger

DeleteAction = Callable[[Sequence[str]], Awaitable[ActionResult]]
UpdateAction = Callable[[Sequence[str], Mapping[str, Any]], Awaitable[ActionResult]]
Notifier = Callable[..., Any]

MAX_LISTED_FAILURES = 5


class MutationStatus(Enum):
    SUCCEEDED = "succeeded"
    PARTIAL = "partial"
    FAILED = "failed"
    DENIED = "denied"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class MutationOutcome:
    status: MutationStatus
    result: Optional[ActionResult] = None
    error: Optional[ConsoleError] = None
    page_corrected: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status in (MutationStatus.SUCCEEDED, MutationStatus.PARTIAL)


class MutationCoordinator:
    """Runs delete/update actions on behalf of one list screen."""

    def __init__(
        self,
        controller: EntityManagementController,
        *,
        delete_action: Optional[DeleteAction] = None,
        update_action: Optional[UpdateAction] = None,
        notify: Optional[Notifier] = None,
        item_label: str = "record",
    ) -> None:
        self._controller = controller
        self._delete = delete_action
        self._update = update_action
        self._notify = notify
        self.item_label = item_label
        # field name -> message of the last failed mutation, for forms
        self.field_errors: Dict[str, str] = {}
        self._reconcile_lock = asyncio.Lock()

    @property
    def navigator(self) -> PageNavigator:
        return self._controller.navigator

    # ------------------------------------------------------------------ #
    # public operations
    # ------------------------------------------------------------------ #

    async def delete_one(self, record_id: str) -> MutationOutcome:
        return await self._delete_ids([record_id], batch=False)

    async def delete_many(self, record_ids: Iterable[str]) -> MutationOutcome:
        return await self._delete_ids(list(record_ids), batch=True)

    async def delete_selected(self) -> MutationOutcome:
        return await self.delete_many(self._controller.selection.selected_in_page_order())

    async def update_one(self, record_id: str, changes: Mapping[str, Any]) -> MutationOutcome:
        return await self._update_ids([record_id], changes, batch=False)

    async def update_many(self, record_ids: Iterable[str], changes: Mapping[str, Any]) -> MutationOutcome:
        return await self._update_ids(list(record_ids), changes, batch=True)

    # ------------------------------------------------------------------ #
    # guards
    # ------------------------------------------------------------------ #

    async def _delete_ids(self, ids: List[str], *, batch: bool) -> MutationOutcome:
        ids = list(dict.fromkeys(i for i in ids if i))
        if not self._controller.can_delete or self._delete is None:
            return self._deny(self._controller.permission_keys.delete or "delete")
        if not ids:
            return self._reject("No records selected", f"Select at least one {self.item_label} to delete.")

        action = self._delete
        return await self._execute("delete", ids, lambda: action(ids), batch=batch)

    async def _update_ids(self, ids: List[str], changes: Mapping[str, Any], *, batch: bool) -> MutationOutcome:
        ids = list(dict.fromkeys(i for i in ids if i))
        if not self._controller.can_edit or self._update is None:
            return self._deny(self._controller.permission_keys.edit or "edit")
        if not ids:
            return self._reject("No records selected", f"Select at least one {self.item_label} to update.")
        if not changes:
            return self._reject("No changes supplied", "There is nothing to update.")

        action = self._update
        return await self._execute("update", ids, lambda: action(ids, dict(changes)), batch=batch)

    def _deny(self, capability: str) -> MutationOutcome:
        error = AuthorizationDenied(capability)
        Slogger.warning("Mutation refused: missing capability", {"capability": capability})
        return MutationOutcome(MutationStatus.DENIED, error=error)

    def _reject(self, message: str, user_message: str) -> MutationOutcome:
        error = ValidationError(message, user_message=user_message)
        Slogger.info(f"Mutation rejected: {message}", {"item": self.item_label})
        self._send(user_message, title="Nothing to do", severity="warning")
        return MutationOutcome(MutationStatus.INVALID, error=error)

    # ------------------------------------------------------------------ #
    # execution
    # ------------------------------------------------------------------ #

    async def _execute(
        self,
        verb: str,
        ids: List[str],
        call: Callable[[], Awaitable[ActionResult]],
        *,
        batch: bool,
    ) -> MutationOutcome:
        context = {
            "component": "MutationCoordinator",
            "action": verb,
            "item": self.item_label,
            "count": len(ids),
            "page": self._controller.current_page,
        }
        Slogger.info(f"Running {verb} for {len(ids)} {self.item_label}(s)", context)

        try:
            result = await call()
        except RemoteFailure as e:
            result = ActionResult.failed(to_action_error(e))
        except Exception as e:
            Slogger.exception(e, f"Unexpected error during {verb}", context)
            error = UnexpectedClientError(e, action=verb)
            self._send(describe_error(error), title=f"{verb.capitalize()} failed", severity="error")
            return MutationOutcome(MutationStatus.FAILED, error=error)

        if not result.success:
            error = RemoteFailure(result.error or ActionError("ACTION_FAILED", f"The {verb} did not succeed."))
            Slogger.error(f"{verb.capitalize()} failed: {error}", {**context, "code": error.code})
            self._report_failure(verb, error, result.failures)
            return MutationOutcome(MutationStatus.FAILED, result=result, error=error)

        self.field_errors = {}
        self._report_success(verb, result, batch=batch)
        self._controller.selection.clear()
        corrected = await self.reconcile()
        self._controller.selection.clear()

        status = MutationStatus.PARTIAL if result.is_partial else MutationStatus.SUCCEEDED
        Slogger.info(
            f"{verb.capitalize()} finished",
            {**context, "status": status.value, "page_corrected": corrected},
        )
        return MutationOutcome(status, result=result, page_corrected=corrected)

    async def reconcile(self) -> bool:
        """
        Refetch the current page; step back once if it is now stranded past
        the end. Returns True when the page had to be corrected.
        """
        async with self._reconcile_lock:
            result = await self._controller.refresh()
            if result is None or not result.is_stranded():
                return False

            target = max(result.total_pages, 1)
            Slogger.info(
                "Page emptied by mutation, stepping back",
                {"from_page": result.current_page, "to_page": target, "total_pages": result.total_pages},
            )
            self.navigator.go_to(target)
            await self._controller.load()
            return True

    # ------------------------------------------------------------------ #
    # notifications
    # ------------------------------------------------------------------ #

    def _report_success(self, verb: str, result: ActionResult, *, batch: bool) -> None:
        past = "deleted" if verb == "delete" else "updated"
        count = result.success_count or 1
        noun = self.item_label if count == 1 else f"{self.item_label}s"

        if result.is_partial:
            self._send(
                f"{count} {noun} {past}, {result.failure_count} failed: "
                f"{self._summarize(result.failures)}",
                title=f"Batch {verb} partially succeeded",
                severity="warning",
            )
        elif batch:
            self._send(f"{count} {noun} {past}.", title=f"Batch {verb} succeeded", severity="information")
        else:
            self._send(f"The {self.item_label} was {past}.", title=f"{verb.capitalize()} succeeded", severity="information")

    def _report_failure(self, verb: str, error: RemoteFailure, failures: Sequence[ItemFailure]) -> None:
        message = error.user_message
        if error.field:
            self.field_errors = {error.field: error.user_message}
            message = f"{error.field}: {error.user_message}"
        if len(failures) > 1:
            message = f"{message} {self._summarize(failures)}"
        self._send(message, title=f"{verb.capitalize()} failed", severity="error")

    @staticmethod
    def _summarize(failures: Sequence[ItemFailure]) -> str:
        listed = [f"{f.item_identifier} ({f.error})" for f in failures[:MAX_LISTED_FAILURES]]
        if len(failures) > MAX_LISTED_FAILURES:
            listed.append(f"and {len(failures) - MAX_LISTED_FAILURES} more")
        return "; ".join(listed)

    def _send(self, message: str, *, title: str, severity: str) -> None:
        if self._notify is not None:
            self._notify(message, title=title, severity=severity)
