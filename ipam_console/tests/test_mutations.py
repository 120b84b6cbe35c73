import unittest
from unittest.mock import AsyncMock

from ipam_console.core.mutations import MutationCoordinator, MutationStatus
from ipam_console.errors import (
    ActionError,
    AuthorizationDenied,
    GENERIC_FAILURE_MESSAGE,
    RemoteFailure,
    UnexpectedClientError,
)
from ipam_console.models.results import ItemFailure
from ipam_console.tests.test_entity_controller import ControllerTestCase


class MutationTestCase(ControllerTestCase):
    async def open_page(self, page, records=23, role="Administrator", attach=False):
        controller = self.build(records=records, role=role, query_string=f"page={page}")
        if attach:
            controller.attach()
        await controller.load()
        self.coordinator = MutationCoordinator(
            controller,
            delete_action=self.backend.delete,
            update_action=self.backend.update,
            notify=self.notify,
            item_label="record",
        )
        return self.coordinator

    def pages_fetched(self):
        return [q.page for q in self.backend.fetch_calls]


class TestReconciliation(MutationTestCase):
    async def test_emptying_last_page_steps_back(self):
        coordinator = await self.open_page(3)
        ids = list(self.controller.selection.page_ids)

        outcome = await coordinator.delete_many(ids)

        self.assertEqual(outcome.status, MutationStatus.SUCCEEDED)
        self.assertTrue(outcome.page_corrected)
        self.assertEqual(self.navigator.current_page(), 2)
        self.assertEqual(self.controller.result.current_page, 2)
        self.assertEqual(self.controller.result.total_pages, 2)
        self.assertEqual(len(self.controller.result.data), 10)
        self.assertEqual(self.pages_fetched(), [3, 3, 2])

    async def test_corrective_hop_is_fetched_once_when_attached(self):
        coordinator = await self.open_page(3, attach=True)

        await coordinator.delete_many(list(self.controller.selection.page_ids))
        await self.drain()

        self.assertEqual(self.pages_fetched(), [3, 3, 2])

    async def test_single_record_on_second_page(self):
        coordinator = await self.open_page(2, records=11)

        outcome = await coordinator.delete_one("r11")

        self.assertTrue(outcome.page_corrected)
        self.assertEqual(self.navigator.current_page(), 1)
        self.assertEqual(self.controller.result.total_pages, 1)

    async def test_first_page_never_hops(self):
        coordinator = await self.open_page(1)

        outcome = await coordinator.delete_one("r01")

        self.assertFalse(outcome.page_corrected)
        self.assertEqual(self.navigator.current_page(), 1)
        self.assertEqual(self.controller.result.total_count, 22)
        self.assertEqual(self.pages_fetched(), [1, 1])

    async def test_deleting_the_only_record(self):
        coordinator = await self.open_page(1, records=1)

        outcome = await coordinator.delete_one("r01")

        self.assertFalse(outcome.page_corrected)
        self.assertEqual(self.navigator.current_page(), 1)
        self.assertTrue(self.controller.result.is_empty())
        self.assertEqual(self.controller.result.total_pages, 0)

    async def test_page_still_populated_stays(self):
        coordinator = await self.open_page(3)

        outcome = await coordinator.delete_one("r21")

        self.assertFalse(outcome.page_corrected)
        self.assertEqual(self.navigator.current_page(), 3)
        self.assertEqual(self.controller.selection.page_ids, ("r22", "r23"))

    async def test_selection_cleared_after_success(self):
        coordinator = await self.open_page(1)
        self.controller.selection.select_one("r01", True)
        self.controller.selection.select_one("r02", True)

        await coordinator.delete_selected()

        self.assertEqual(self.controller.selection.derived_state().count, 0)
        self.assertEqual(self.backend.delete_calls, [["r01", "r02"]])


class TestGuards(MutationTestCase):
    async def test_denied_user_never_reaches_backend(self):
        coordinator = await self.open_page(1, role="Viewer")

        outcome = await coordinator.delete_one("r01")

        self.assertEqual(outcome.status, MutationStatus.DENIED)
        self.assertIsInstance(outcome.error, AuthorizationDenied)
        self.assertEqual(self.backend.delete_calls, [])
        self.assertEqual(self.pages_fetched(), [1])

    async def test_operator_may_update_but_not_delete(self):
        coordinator = await self.open_page(1, role="Operator")

        denied = await coordinator.delete_one("r01")
        allowed = await coordinator.update_one("r01", {"name": "core"})

        self.assertEqual(denied.status, MutationStatus.DENIED)
        self.assertEqual(allowed.status, MutationStatus.SUCCEEDED)
        self.assertEqual(self.backend.update_calls, [(["r01"], {"name": "core"})])

    async def test_empty_batch_rejected(self):
        coordinator = await self.open_page(1)

        outcome = await coordinator.delete_many([])

        self.assertEqual(outcome.status, MutationStatus.INVALID)
        self.assertEqual(self.backend.delete_calls, [])
        self.assertEqual(self.notify.call_args.kwargs["severity"], "warning")

    async def test_empty_changes_rejected(self):
        coordinator = await self.open_page(1)
        outcome = await coordinator.update_one("r01", {})
        self.assertEqual(outcome.status, MutationStatus.INVALID)
        self.assertEqual(self.backend.update_calls, [])


class TestFailureReporting(MutationTestCase):
    async def test_field_error_is_surfaced(self):
        coordinator = await self.open_page(1)

        outcome = await coordinator.update_one("r01", {"name": ""})

        self.assertEqual(outcome.status, MutationStatus.FAILED)
        self.assertEqual(outcome.error.code, "VALIDATION_ERROR")
        self.assertEqual(coordinator.field_errors, {"name": "Name is required."})
        self.notify.assert_called_once_with(
            "name: Name is required.", title="Update failed", severity="error"
        )
        # failed mutations do not refetch
        self.assertEqual(self.pages_fetched(), [1])

    async def test_partial_batch_reports_failures(self):
        coordinator = await self.open_page(1)
        self.backend.refuse["r02"] = ItemFailure("record r02", "still referenced", id="r02")

        outcome = await coordinator.delete_many(["r01", "r02", "r03"])

        self.assertEqual(outcome.status, MutationStatus.PARTIAL)
        self.assertEqual(outcome.result.success_count, 2)
        self.assertEqual(outcome.result.failure_count, 1)
        message = self.notify.call_args.args[0]
        self.assertIn("2 records deleted, 1 failed", message)
        self.assertIn("record r02 (still referenced)", message)
        self.assertEqual(self.notify.call_args.kwargs["severity"], "warning")
        self.assertEqual(self.controller.result.total_count, 21)

    async def test_whole_batch_failing(self):
        coordinator = await self.open_page(1)
        for record_id in ("r01", "r02"):
            self.backend.refuse[record_id] = ItemFailure(f"record {record_id}", "locked", id=record_id)

        outcome = await coordinator.delete_many(["r01", "r02"])

        self.assertEqual(outcome.status, MutationStatus.FAILED)
        self.assertEqual(outcome.error.code, "BATCH_FAILED")
        self.assertEqual(self.notify.call_args.kwargs["severity"], "error")

    async def test_failed_delete_keeps_selection(self):
        coordinator = await self.open_page(1)
        self.controller.selection.select_one("r01", True)
        self.backend.refuse["r01"] = ItemFailure("record r01", "locked", id="r01")

        outcome = await coordinator.delete_selected()

        self.assertEqual(outcome.status, MutationStatus.FAILED)
        self.assertEqual(self.controller.selection.selected_ids, {"r01"})
        self.assertEqual(self.pages_fetched(), [1])

    async def test_single_failure_keeps_its_code_and_field(self):
        coordinator = await self.open_page(1)
        self.backend.refuse["r01"] = ItemFailure(
            "record r01", "Reassign subnets first.", id="r01", code="VLAN_IN_USE", field="vlan_id"
        )

        outcome = await coordinator.delete_one("r01")

        self.assertEqual(outcome.error.code, "VLAN_IN_USE")
        self.assertEqual(coordinator.field_errors, {"vlan_id": "Reassign subnets first."})

    async def test_unexpected_exception(self):
        controller = self.build()
        await controller.load()
        coordinator = MutationCoordinator(
            controller,
            delete_action=AsyncMock(side_effect=ConnectionError("reset")),
            notify=self.notify,
        )

        outcome = await coordinator.delete_one("r01")

        self.assertEqual(outcome.status, MutationStatus.FAILED)
        self.assertIsInstance(outcome.error, UnexpectedClientError)
        self.assertEqual(len(self.backend.fetch_calls), 1)
        self.assertEqual(self.notify.call_args.args[0], GENERIC_FAILURE_MESSAGE)

    async def test_raised_remote_failure_is_reported(self):
        controller = self.build()
        await controller.load()
        error = ActionError("DATABASE_ERROR", "The database is locked.")
        coordinator = MutationCoordinator(
            controller,
            delete_action=AsyncMock(side_effect=RemoteFailure(error)),
            notify=self.notify,
        )

        outcome = await coordinator.delete_one("r01")

        self.assertEqual(outcome.status, MutationStatus.FAILED)
        self.assertEqual(outcome.error.code, "DATABASE_ERROR")
        self.assertEqual(self.notify.call_args.args[0], "The database is locked.")


if __name__ == "__main__":
    unittest.main()
