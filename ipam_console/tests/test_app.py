import unittest

from textual.widgets import Button, Input, Static

from ipam_console.core.session import UserSession
from ipam_console.di import Container
from ipam_console.models.vlan import Vlan
from ipam_console.tests.helpers import user
from ipam_console.ui.app import IpamConsoleApp
from ipam_console.ui.screens.resource_screen import ResourceScreen
from ipam_console.ui.widgets.confirmation_modal import ConfirmationModal


def memory_config():
    return {
        "sqlite": {"db_path": ":memory:"},
        "ui": {"per_page": 10, "date_format": "%Y-%m-%d"},
        "session": {},
    }


class TestConsoleApp(unittest.IsolatedAsyncioTestCase):
    def make_app(self, role="Administrator", vlans=23, start_screen="vlans"):
        config = memory_config()
        container = Container(config, UserSession(user(role)))
        for i in range(vlans):
            container.vlan_repo.add(Vlan(id="", vlan_number=100 + i, name=f"vlan-{i}"))
        return IpamConsoleApp(config, container, start_screen=start_screen)

    async def settle(self, app, pilot):
        await app.workers.wait_for_complete()
        await pilot.pause()

    async def test_first_page_and_status_line(self):
        app = self.make_app()
        async with app.run_test() as pilot:
            await self.settle(app, pilot)
            screen = app.screen
            self.assertIsInstance(screen, ResourceScreen)
            self.assertEqual(screen.controller.result.total_count, 23)
            self.assertEqual(
                screen.status_controller.text.split(" | ")[:3],
                ["Total: 23", "Page: 1/3", "Selected: 0"],
            )

    async def test_paging_and_selection(self):
        app = self.make_app()
        async with app.run_test() as pilot:
            await self.settle(app, pilot)
            screen = app.screen

            screen.action_next_page()
            await self.settle(app, pilot)
            self.assertEqual(screen.controller.result.current_page, 2)

            screen.action_toggle_select_all()
            await pilot.pause()
            self.assertEqual(screen.controller.selection.derived_state().count, 10)
            self.assertTrue(screen.query_one("#batch-delete", Button).display)

    async def test_reload_keeps_half_typed_jump_page(self):
        app = self.make_app()
        async with app.run_test() as pilot:
            await self.settle(app, pilot)
            screen = app.screen
            jump = screen.query_one("#jump-input", Input)
            jump.value = "3"

            screen.action_refresh()
            await self.settle(app, pilot)
            self.assertEqual(jump.value, "3")

            screen.action_next_page()
            await self.settle(app, pilot)
            self.assertEqual(jump.value, "2")

    async def test_batch_delete_on_last_page_steps_back(self):
        app = self.make_app()
        async with app.run_test() as pilot:
            await self.settle(app, pilot)
            screen = app.screen
            screen.navigator.go_to(3)
            await self.settle(app, pilot)

            screen.action_toggle_select_all()
            screen.action_delete_selected()
            await pilot.pause()
            self.assertIsInstance(app.screen, ConfirmationModal)
            await pilot.click("#yes-button")
            await self.settle(app, pilot)

            self.assertIs(app.screen, screen)
            self.assertEqual(screen.navigator.current_page(), 2)
            self.assertEqual(screen.controller.result.total_count, 20)
            self.assertEqual(screen.controller.result.total_pages, 2)

    async def test_viewer_cannot_select(self):
        app = self.make_app(role="Viewer")
        async with app.run_test() as pilot:
            await self.settle(app, pilot)
            screen = app.screen
            self.assertFalse(screen.check_action("delete_selected", ()))

            screen.action_toggle_select_all()
            self.assertEqual(screen.controller.selection.derived_state().count, 0)
            self.assertFalse(screen.query_one("#batch-delete", Button).display)

    async def test_access_denied_view(self):
        app = self.make_app(role="Viewer", start_screen="audit_logs")
        async with app.run_test() as pilot:
            await self.settle(app, pilot)
            screen = app.screen
            self.assertTrue(screen.controller.access_denied)
            self.assertTrue(screen.query_one("#access-denied", Static).display)
            self.assertTrue(screen.status_controller.text.startswith("Access denied"))

    async def test_empty_state(self):
        app = self.make_app(vlans=0)
        async with app.run_test() as pilot:
            await self.settle(app, pilot)
            screen = app.screen
            self.assertTrue(screen.query_one("#empty-state", Static).display)
            self.assertFalse(screen.query_one("#pagination").display)


if __name__ == "__main__":
    unittest.main()
