# ipam_console/ui/screens/resource_screen.py
"""
Paginated list screen shared by every resource (VLANs, subnets, audit log).
"""

from __future__ import annotations

from typing import Any, Awaitable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static

from ipam_console.core.entity_controller import EntityManagementController
from ipam_console.core.mutations import MutationCoordinator, MutationOutcome
from ipam_console.core.navigator import PageNavigator
from ipam_console.core.query_store import QueryStringStore
from ipam_console.core.session import UserSession
from ipam_console.db.repos.base_repo import SEARCH_PARAM
from ipam_console.services.resource_service import ResourceService
from ipam_console.ui.controllers.status_bar import StatusBarController
from ipam_console.ui.screens.resources import ResourceDefinition
from ipam_console.ui.widgets.confirmation_modal import ConfirmationModal
from ipam_console.ui.widgets.pagination import Pagination
from ipam_console.ui.widgets.record_table import RecordTable
from ipam_console.ui.widgets.search_bar import SearchBar
from simple_logger import Slogger

# bindings that only make sense for users allowed to delete
_DELETE_ACTIONS = frozenset({"toggle_select_all", "delete_row", "delete_selected"})


class ResourceScreen(Screen):
    """List screen for one resource, driven by an EntityManagementController."""

    DEFAULT_CSS = """
    ResourceScreen #screen-title {
        height: 1;
        padding: 0 1;
    }

    ResourceScreen #toolbar {
        height: 3;
    }

    ResourceScreen #search-bar {
        width: 1fr;
    }

    ResourceScreen #selection-summary {
        width: auto;
        min-width: 20;
        padding: 1 1;
    }

    ResourceScreen #records-table {
        height: 1fr;
    }

    ResourceScreen #access-denied, ResourceScreen #empty-state {
        height: 1fr;
        content-align: center middle;
        text-style: bold;
    }

    ResourceScreen #status-bar {
        dock: bottom;
        height: 1;
        background: $primary-background;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("a", "toggle_select_all", "Select all", show=True),
        Binding("d", "delete_row", "Delete", show=True),
        Binding("x", "delete_selected", "Delete selected", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("left_square_bracket", "prev_page", "Prev page", show=True),
        Binding("right_square_bracket", "next_page", "Next page", show=True),
        Binding("g", "focus_jump", "Go to page", show=False),
        Binding("f", "focus_search", "Search", show=False),
        Binding("escape", "focus_table", "Table", show=False),
    ]

    def __init__(
        self,
        resource: ResourceDefinition,
        service: ResourceService,
        session: UserSession,
        *,
        page_size: int = 10,
        date_format: str = "%Y-%m-%d %H:%M",
        query_string: str = "",
        name: Optional[str] = None,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(name=name, id=id)
        self.resource = resource
        self.date_format = date_format

        self.store = QueryStringStore(query_string)
        self.navigator = PageNavigator(self.store, notify=self._notify)
        self.controller: EntityManagementController = EntityManagementController(
            service.fetch,
            resource.permissions,
            session,
            self.navigator,
            page_size=page_size,
            notify=self._notify,
            schedule=self._schedule,
            resource_label=resource.plural,
        )
        self.coordinator = MutationCoordinator(
            self.controller,
            delete_action=service.delete,
            update_action=service.update,
            notify=self._notify,
            item_label=resource.item_label,
        )
        self._returning_from_modal = False
        # page whose number was last written into the jump input
        self._jump_page: Optional[int] = None

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Vertical(id="content-area"):
            yield Static(f"[b]{self.resource.title}[/b]", id="screen-title")
            with Horizontal(id="toolbar"):
                yield SearchBar(
                    self.resource.search_placeholder,
                    value=self.store.get(SEARCH_PARAM) or "",
                    id="search-bar",
                )
                yield Static("", id="selection-summary", markup=False)
                yield Button("Delete selected", variant="error", id="batch-delete")
            yield Static(
                f"Access denied. You do not have permission to view {self.resource.plural}.",
                id="access-denied",
            )
            yield RecordTable(id="records-table")
            yield Static("", id="empty-state", markup=False)
            yield Pagination(id="pagination")

        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(RecordTable).setup_columns(self.resource.columns)
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static))

        self.controller.subscribe(self._on_controller_change)
        self.controller.attach()
        self.refresh_view()
        self._schedule(self.controller.load())

    def on_screen_resume(self) -> None:
        if self._returning_from_modal:
            self._returning_from_modal = False
            return
        # the first resume coincides with the mount-time load and collapses into it
        self._schedule(self.controller.load())

    def on_unmount(self) -> None:
        self.controller.dispose()

    # ------------------------------------------------------------------ #
    # plumbing
    # ------------------------------------------------------------------ #

    def _schedule(self, coro: Awaitable[Any]) -> None:
        self.run_worker(coro, group=f"{self.resource.key}-load", exit_on_error=False)

    def _notify(self, message: str, *, title: str = "", severity: str = "information") -> None:
        self.app.notify(message, title=title, severity=severity)

    def _on_controller_change(self, controller: EntityManagementController) -> None:
        if self.is_mounted:
            self.refresh_view()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action in _DELETE_ACTIONS:
            return self.controller.can_delete
        return True

    # ------------------------------------------------------------------ #
    # rendering
    # ------------------------------------------------------------------ #

    def refresh_view(self) -> None:
        """Project controller state onto the widgets."""
        controller = self.controller
        result = controller.result

        table = self.query_one(RecordTable)
        denied = self.query_one("#access-denied", Static)
        empty = self.query_one("#empty-state", Static)
        pagination = self.query_one(Pagination)
        toolbar = self.query_one("#toolbar", Horizontal)
        batch_delete = self.query_one("#batch-delete", Button)
        summary = self.query_one("#selection-summary", Static)

        self.refresh_bindings()

        if controller.access_denied:
            denied.display = True
            for widget in (table, empty, pagination, toolbar):
                widget.display = False
            self._update_status(denied=True)
            return

        denied.display = False
        toolbar.display = True
        loading = controller.is_loading
        has_rows = not result.is_empty()

        table.loading = loading
        table.display = has_rows or loading
        table.show_records(
            [(record.id, self.resource.row(record, self.date_format)) for record in result.data],
            controller.selection.selected_ids,
            selectable=controller.can_delete,
            header=controller.selection.derived_state().checkbox,
        )

        empty.display = not has_rows and not loading
        if controller.error is not None:
            empty.update(controller.error.user_message)
        else:
            empty.update(f"No {self.resource.plural} found.")

        pagination.display = result.total_pages > 1
        jump_text = None
        if result.current_page != self._jump_page:
            self._jump_page = result.current_page
            jump_text = self.navigator.input_text
        pagination.update_pages(result.current_page, result.total_pages, jump_text=jump_text)

        derived = controller.selection.derived_state()
        batch_delete.display = controller.can_delete and derived.count > 0
        if controller.can_delete and has_rows:
            summary.display = True
            summary.update(f"{derived.checkbox.glyph} {derived.count} of {len(result.data)} selected")
        else:
            summary.display = False

        self._update_status()

    def _update_status(self, denied: bool = False) -> None:
        controller = self.controller
        user = controller.session.current_user
        self.status_controller.update({
            "total": controller.result.total_count,
            "pages": controller.result.total_pages,
            "current_page": controller.result.current_page,
            "selected": controller.selection.derived_state().count,
            "search_query": self.store.get(SEARCH_PARAM) or "",
            "loading": controller.is_loading,
            "denied": denied,
            "user": user.username if user is not None else "",
        })

    # ------------------------------------------------------------------ #
    # widget events
    # ------------------------------------------------------------------ #

    def on_record_table_row_toggled(self, event: RecordTable.RowToggled) -> None:
        if not self.controller.can_delete:
            return
        self.controller.selection.toggle(event.record_id)
        self.refresh_view()

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        self.navigator.go_to(event.page)

    def on_pagination_jump_requested(self, event: Pagination.JumpRequested) -> None:
        self.navigator.jump_to_page(event.raw)
        self.query_one(Pagination).set_jump_text(self.navigator.input_text)

    def on_search_bar_submitted(self, event: SearchBar.Submitted) -> None:
        Slogger.debug(f"Search submitted: '{event.query}'", {"resource": self.resource.key})
        # a new search always starts from the first page
        self.store.update(**{SEARCH_PARAM: event.query or None, PageNavigator.PAGE_PARAM: None})

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "batch-delete":
            event.stop()
            self.action_delete_selected()

    # ------------------------------------------------------------------ #
    # key-binding actions
    # ------------------------------------------------------------------ #

    def action_toggle_select_all(self) -> None:
        if not self.controller.can_delete:
            return
        self.controller.selection.toggle_all()
        self.refresh_view()

    def action_delete_row(self) -> None:
        if not self.controller.can_delete:
            return
        record_id = self.query_one(RecordTable).cursor_record_id()
        if record_id is None:
            return
        record = next((r for r in self.controller.result.data if r.id == record_id), None)
        label = getattr(record, "label", None) or record_id
        self._confirm(
            f"Delete {self.resource.item_label}",
            f"Delete {label}? This cannot be undone.",
            lambda: self.coordinator.delete_one(record_id),
        )

    def action_delete_selected(self) -> None:
        if not self.controller.can_delete:
            return
        ids = self.controller.selection.selected_in_page_order()
        if not ids:
            self._notify(
                f"Select at least one {self.resource.item_label} to delete.",
                title="Nothing to do",
                severity="warning",
            )
            return
        noun = self.resource.item_label if len(ids) == 1 else self.resource.plural
        self._confirm(
            f"Delete {len(ids)} {noun}",
            f"Delete {len(ids)} selected {noun}? This cannot be undone.",
            lambda: self.coordinator.delete_many(ids),
        )

    def action_refresh(self) -> None:
        self._schedule(self.controller.refresh())

    def action_prev_page(self) -> None:
        self.navigator.prev_page()

    def action_next_page(self) -> None:
        self.navigator.next_page()

    def action_focus_jump(self) -> None:
        self.query_one(Pagination).focus_jump()

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus_input()

    def action_focus_table(self) -> None:
        self.query_one(RecordTable).focus()

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _confirm(self, title: str, message: str, operation) -> None:
        def on_yes() -> None:
            self.run_worker(self._run_mutation(operation()), group=f"{self.resource.key}-mutation")

        self._returning_from_modal = True
        self.app.push_screen(ConfirmationModal(title, message, on_yes))

    async def _run_mutation(self, operation: Awaitable[MutationOutcome]) -> MutationOutcome:
        outcome = await operation
        if self.is_mounted:
            self.refresh_view()
        return outcome
