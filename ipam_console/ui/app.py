"""
Main Textual application class for the IPAM console
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import App
from textual.binding import Binding

from ipam_console.di import Container, build_container
from ipam_console.models.user import CurrentUser
from ipam_console.ui.screens.resource_screen import ResourceScreen
from ipam_console.ui.screens.resources import RESOURCE_SCREENS
from simple_logger import Slogger


class IpamConsoleApp(App):
    """Terminal console for browsing and pruning IPAM resources."""

    TITLE = "IPAM Console"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("v", "show('vlans')", "VLANs", show=True),
        Binding("s", "show('subnets')", "Subnets", show=True),
        Binding("l", "show('audit_logs')", "Audit log", show=True),
    ]

    # ------------------------------------------------------------------ #
    # init / mount
    # ------------------------------------------------------------------ #

    def __init__(
        self,
        config: Dict[str, Any],
        container: Optional[Container] = None,
        *,
        start_screen: str = "vlans",
    ) -> None:
        super().__init__()
        self.config = config
        self.container: Container = container or build_container(config)
        self.start_screen = start_screen

    def on_mount(self) -> None:
        """Install one screen per resource and resolve the acting user."""
        session = self.container.session
        date_format = self.config.get("ui", {}).get("date_format", "%Y-%m-%d %H:%M")

        for resource in RESOURCE_SCREENS:
            self.install_screen(
                ResourceScreen(
                    resource,
                    getattr(self.container, resource.service_attr),
                    session,
                    page_size=self.container.page_size,
                    date_format=date_format,
                    id=f"{resource.key}-screen",
                ),
                name=resource.key,
            )

        self.push_screen(self.start_screen)

        if session.is_auth_loading:
            self.run_worker(session.resolve(self._load_user), group="auth", exit_on_error=False)

    async def _load_user(self) -> Optional[CurrentUser]:
        """Build the acting user from the `session` config section."""
        section = self.config.get("session") or {}
        if not section.get("user_id"):
            return None
        return CurrentUser.for_role(
            str(section["user_id"]),
            section.get("username") or str(section["user_id"]),
            section.get("role") or "",
            email=section.get("email", ""),
        )

    # ------------------------------------------------------------------ #
    # key-binding actions
    # ------------------------------------------------------------------ #

    def action_show(self, screen_name: str) -> None:
        if isinstance(self.screen, ResourceScreen) and self.screen.resource.key == screen_name:
            return
        Slogger.debug(f"Switching to screen '{screen_name}'")
        self.switch_screen(screen_name)

    def on_unmount(self) -> None:
        self.container.close()
