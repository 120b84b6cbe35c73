# ipam_console/core/entity_controller.py
"""
Fetch lifecycle of one list screen.

Every load gets a token from a monotonically increasing counter. Only the
result of the newest token is applied; anything else is discarded when it
arrives. A load for the same query as the one already in flight does not
issue a second request, it waits for the first one instead.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Set, TypeVar

from ipam_console.core.navigator import PageNavigator
from ipam_console.core.permission_gate import DEFAULT_GATE, Capabilities, PermissionGate
from ipam_console.core.selection import SelectionTracker
from ipam_console.core.session import UserSession
from ipam_console.errors import ConsoleError, RemoteFailure, UnexpectedClientError, describe_error
from ipam_console.models.pagination import PaginatedResult
from ipam_console.models.permissions import ResourcePermissions
from ipam_console.models.query import DEFAULT_PAGE_SIZE, Query
from simple_logger import Slogger

T = TypeVar("T")

FetchAction = Callable[[Query], Awaitable[PaginatedResult]]
Notifier = Callable[..., Any]
Scheduler = Callable[[Awaitable[Any]], Any]
ChangeListener = Callable[["EntityManagementController"], Any]


class _Request:
    __slots__ = ("token", "query", "future")

    def __init__(self, token: int, query: Query, future: "asyncio.Future[Optional[PaginatedResult]]") -> None:
        self.token = token
        self.query = query
        self.future = future


class EntityManagementController(Generic[T]):
    """Loads pages, exposes capability flags and owns the row selection."""

    def __init__(
        self,
        fetch_action: FetchAction,
        permissions: ResourcePermissions,
        session: UserSession,
        navigator: PageNavigator,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        notify: Optional[Notifier] = None,
        gate: PermissionGate = DEFAULT_GATE,
        selection: Optional[SelectionTracker] = None,
        schedule: Optional[Scheduler] = None,
        resource_label: str = "records",
    ) -> None:
        self._fetch = fetch_action
        self._keys = permissions
        self._session = session
        self._navigator = navigator
        self._page_size = page_size
        self._notify = notify
        self._gate = gate
        self._schedule = schedule
        self.resource_label = resource_label

        self.selection = selection or SelectionTracker()
        self.result: PaginatedResult[T] = PaginatedResult.empty(page_size)
        self.error: Optional[ConsoleError] = None

        self._loading = True
        self._token = 0
        self._inflight: Optional[_Request] = None
        self._disposed = False
        self._attached = False
        self._listeners: List[ChangeListener] = []
        self._tasks: Set["asyncio.Task[Any]"] = set()

        # bumped on every applied result; `_settled_query` is the query it answered
        self._settled = 0
        self._settled_query: Optional[Query] = None

        self._capabilities: Optional[Capabilities] = None
        self._capabilities_user: Any = None

    # ------------------------------------------------------------------ #
    # derived state
    # ------------------------------------------------------------------ #

    @property
    def navigator(self) -> PageNavigator:
        return self._navigator

    @property
    def session(self) -> UserSession:
        return self._session

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def permission_keys(self) -> ResourcePermissions:
        return self._keys

    @property
    def is_loading(self) -> bool:
        return self._session.is_auth_loading or self._loading

    @property
    def permissions(self) -> Capabilities:
        """Capability projection, recomputed only when the user changes."""
        user = self._session.current_user
        if self._capabilities is None or user is not self._capabilities_user:
            self._capabilities = self._gate.project(user, self._keys)
            self._capabilities_user = user
        return self._capabilities

    @property
    def can_view(self) -> bool:
        return self.permissions.can_view

    @property
    def can_create(self) -> bool:
        return self.permissions.can_create

    @property
    def can_edit(self) -> bool:
        return self.permissions.can_edit

    @property
    def can_delete(self) -> bool:
        return self.permissions.can_delete

    @property
    def access_denied(self) -> bool:
        return not self._session.is_auth_loading and not self.can_view

    @property
    def current_page(self) -> int:
        return self._navigator.current_page()

    def build_query(self) -> Query:
        filters = {
            key: value
            for key, value in self._navigator.store.params().items()
            if key != PageNavigator.PAGE_PARAM
        }
        return Query(page=self._navigator.current_page(), page_size=self._page_size, filters=filters)

    # ------------------------------------------------------------------ #
    # wiring
    # ------------------------------------------------------------------ #

    def attach(self) -> None:
        """Reload whenever the query string changes or authentication settles."""
        if self._attached:
            return
        self._navigator.store.subscribe(self._on_query_changed)
        self._session.subscribe(self._on_session_changed)
        self._attached = True

    def dispose(self) -> None:
        """Stop listening; results still in flight will be ignored."""
        self._disposed = True
        self._token += 1
        if self._attached:
            self._navigator.store.unsubscribe(self._on_query_changed)
            self._session.unsubscribe(self._on_session_changed)
            self._attached = False
        self._listeners.clear()

    def subscribe(self, callback: ChangeListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: ChangeListener) -> bool:
        if callback in self._listeners:
            self._listeners.remove(callback)
            return True
        return False

    def _on_query_changed(self, params: Dict[str, str]) -> None:
        self._schedule_load(self._load_for(self.build_query(), self._settled))

    def _on_session_changed(self, session: UserSession) -> None:
        if not session.is_auth_loading:
            self._schedule_load(self.load())

    async def _load_for(self, query: Query, settled_before: int) -> Optional[PaginatedResult[T]]:
        """Reactive load for `query`, skipped when a newer settle already covered it."""
        if self._settled > settled_before and self._settled_query == query:
            Slogger.debug(
                "Reactive load already satisfied by a settled result",
                {"resource": self.resource_label, "page": query.page},
            )
            return self.result
        return await self.load()

    def _schedule_load(self, coro: Awaitable[Any]) -> None:
        if self._disposed:
            coro.close()
            return
        if self._schedule is not None:
            self._schedule(coro)
            return
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            coro.close()
            Slogger.warning(
                "EntityManagementController: no running event loop, load not scheduled",
                {"resource": self.resource_label},
            )
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # ------------------------------------------------------------------ #
    # loading
    # ------------------------------------------------------------------ #

    async def load(self, *, force: bool = False) -> Optional[PaginatedResult[T]]:
        """
        Fetch the page named by the query string.

        Returns the applied result, or None when nothing was applied (auth
        still loading, failure, superseded or disposed).
        """
        if self._disposed:
            return None

        if self._session.is_auth_loading:
            self._set_loading(True)
            Slogger.debug("Load deferred until authentication settles", {"resource": self.resource_label})
            return None

        if not self.can_view:
            # whatever is still in flight belongs to a user who could view
            self._token += 1
            self._inflight = None
            Slogger.info(
                "Load skipped: missing view capability",
                {"resource": self.resource_label, "capability": self._keys.view},
            )
            self._settled_query = None
            self._apply(PaginatedResult.empty(self._page_size), error=None)
            return self.result

        query = self.build_query()
        inflight = self._inflight
        if not force and inflight is not None and inflight.query == query:
            Slogger.debug(
                "Duplicate load collapsed into the request in flight",
                {"resource": self.resource_label, "token": inflight.token, "page": query.page},
            )
            return await asyncio.shield(inflight.future)

        self._token += 1
        request = _Request(self._token, query, asyncio.get_running_loop().create_future())
        self._inflight = request
        self._set_loading(True)

        outcome: Optional[PaginatedResult[T]] = None
        try:
            outcome = await self._run(request)
        finally:
            if self._inflight is request:
                self._inflight = None
            if not request.future.done():
                request.future.set_result(outcome)
        return outcome

    async def refresh(self) -> Optional[PaginatedResult[T]]:
        """Always issue a new request, superseding anything in flight."""
        return await self.load(force=True)

    async def _run(self, request: _Request) -> Optional[PaginatedResult[T]]:
        context = {
            "resource": self.resource_label,
            "token": request.token,
            "page": request.query.page,
            "page_size": request.query.page_size,
        }
        Slogger.info("Fetching page", context)

        failure: Optional[ConsoleError] = None
        result: Optional[PaginatedResult[T]] = None
        try:
            result = await self._fetch(request.query)
        except RemoteFailure as e:
            failure = e
        except Exception as e:
            Slogger.exception(e, "Unexpected error while fetching", context)
            failure = UnexpectedClientError(e, action="fetch")

        if self._disposed or request.token != self._token:
            Slogger.info("Discarding stale result", {**context, "latest_token": self._token})
            return None

        self._settled_query = request.query
        if failure is not None:
            self._fail(failure, context)
            return None

        Slogger.info(
            "Page settled",
            {**context, "rows": len(result.data), "total": result.total_count, "pages": result.total_pages},
        )
        self._apply(result, error=None)
        return result

    # ------------------------------------------------------------------ #
    # state transitions
    # ------------------------------------------------------------------ #

    def _apply(self, result: PaginatedResult[T], error: Optional[ConsoleError]) -> None:
        self.result = result
        self.error = error
        self._loading = False
        self._settled += 1
        self.selection.set_items(result.data)
        self._navigator.sync(result)
        self._emit()

    def _fail(self, error: ConsoleError, context: Dict[str, Any]) -> None:
        Slogger.error(f"Fetch failed: {error}", {**context, "code": error.code})
        self._apply(PaginatedResult.empty(self._page_size), error=error)
        if self._notify is not None:
            self._notify(
                describe_error(error),
                title=f"Could not load {self.resource_label}",
                severity="error",
            )

    def _set_loading(self, loading: bool) -> None:
        if self._loading != loading:
            self._loading = loading
            self._emit()

    def _emit(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception as e:
                Slogger.exception(e, "Error in controller listener", {"resource": self.resource_label})
