"""Fakes shared by the controller and mutation tests."""

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ipam_console.errors import ActionError
from ipam_console.models.pagination import PaginatedResult
from ipam_console.models.query import Query
from ipam_console.models.results import ActionResult, ItemFailure
from ipam_console.models.user import CurrentUser


@dataclass(frozen=True)
class Record:
    id: str

    @property
    def label(self) -> str:
        return f"record {self.id}"


def make_records(count: int) -> List[Record]:
    return [Record(id=f"r{i:02d}") for i in range(1, count + 1)]


def user(role: str = "Administrator") -> CurrentUser:
    return CurrentUser.for_role(f"user-{role.lower()}", role.lower(), role)


class FakeBackend:
    """
    In-memory list endpoint. Pages listed in `gates` wait for their event
    before answering, so tests can hold a fetch in flight.
    """

    def __init__(self, records: Sequence[Record]):
        self.records: List[Record] = list(records)
        self.fetch_calls: List[Query] = []
        self.delete_calls: List[List[str]] = []
        self.update_calls: List[tuple] = []
        self.gates: Dict[int, asyncio.Event] = {}
        self.refuse: Dict[str, ItemFailure] = {}
        self.fetch_error: Optional[BaseException] = None

    async def fetch(self, query: Query) -> PaginatedResult:
        self.fetch_calls.append(query)
        gate = self.gates.get(query.page)
        if gate is not None:
            await gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        # snapshot at answer time, like a server would
        start = query.offset
        page = self.records[start:start + query.page_size]
        return PaginatedResult.build(page, len(self.records), query.page, query.page_size)

    async def delete(self, ids: Sequence[str]) -> ActionResult:
        self.delete_calls.append(list(ids))
        failures = [self.refuse[i] for i in ids if i in self.refuse]
        removed = [i for i in ids if i not in self.refuse]
        self.records = [r for r in self.records if r.id not in removed]
        return ActionResult.from_batch(len(removed), failures, item_label="record")

    async def update(self, ids: Sequence[str], changes) -> ActionResult:
        self.update_calls.append((list(ids), dict(changes)))
        if "name" in changes and not changes["name"]:
            return ActionResult.failed(
                ActionError(code="VALIDATION_ERROR", user_message="Name is required.", field="name")
            )
        return ActionResult.ok(len(ids))
