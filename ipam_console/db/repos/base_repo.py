# ipam_console/db/repos/base_repo.py
"""
Shared CRUD access for one table. Concrete repositories only describe their
table: what to select, what to search and how to order.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from ipam_console.db.connection import SQLiteConnection
from simple_logger import Slogger

M = TypeVar("M")

SEARCH_PARAM = "q"


class TableRepo(Generic[M]):
    """CRUD access for records that map to a frozen dataclass model."""

    table: str = ""
    model: Type[M]
    columns_sql: str = "*"
    from_sql: Optional[str] = None
    order_by: str = "id"
    # columns matched with LIKE against the `q` filter
    search_columns: Tuple[str, ...] = ()
    # filter name -> column compared for equality
    filter_columns: Dict[str, str] = {}
    writable_columns: Tuple[str, ...] = ()

    def __init__(self, db: SQLiteConnection) -> None:
        self._db = db

    @property
    def _source(self) -> str:
        return self.from_sql or self.table

    # ---------- filters ----------------------------------------------------

    def _where(self, filters: Optional[Mapping[str, Any]]) -> Tuple[str, List[Any]]:
        filters = filters or {}
        clauses: List[str] = []
        params: List[Any] = []

        search = str(filters.get(SEARCH_PARAM) or "").strip()
        if search and self.search_columns:
            clauses.append("(" + " OR ".join(f"{col} LIKE ?" for col in self.search_columns) + ")")
            params.extend([f"%{search}%"] * len(self.search_columns))

        for name, column in self.filter_columns.items():
            value = filters.get(name)
            if value not in (None, ""):
                clauses.append(f"{column} = ?")
                params.append(value)

        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    # ---------- read side --------------------------------------------------

    def list(
        self,
        *,
        page: int = 1,
        per_page: int = 10,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[M]:
        """Return one page of records as models."""
        where, params = self._where(filters)
        skip = (page - 1) * per_page
        query = (
            f"SELECT {self.columns_sql} FROM {self._source}{where} "
            f"ORDER BY {self.order_by} LIMIT ? OFFSET ?"
        )

        cursor = self._db.cursor()
        cursor.execute(query, [*params, per_page, skip])
        rows = cursor.fetchall()

        Slogger.log(f"{type(self).__name__}.list: Retrieved {len(rows)} rows (page={page}, per_page={per_page})")
        return [self.model.from_sqlite(dict(row)) for row in rows]

    def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        """Total records matching filters."""
        where, params = self._where(filters)
        cursor = self._db.cursor()
        cursor.execute(f"SELECT COUNT(*) FROM {self._source}{where}", params)
        return cursor.fetchone()[0]

    def by_id(self, record_id: str) -> Optional[M]:
        cursor = self._db.cursor()
        cursor.execute(
            f"SELECT {self.columns_sql} FROM {self._source} WHERE {self.table}.id = ?",
            (record_id,),
        )
        row = cursor.fetchone()
        return self.model.from_sqlite(dict(row)) if row else None

    # ---------- write side -------------------------------------------------

    def add(self, record: M) -> M:
        """Insert a record; an empty id gets a generated one."""
        if not getattr(record, "id", ""):
            record = replace(record, id=uuid.uuid4().hex)
        doc = record.to_sqlite()

        fields = ", ".join(doc.keys())
        placeholders = ", ".join(["?"] * len(doc))
        cursor = self._db.cursor()
        cursor.execute(
            f"INSERT INTO {self.table} ({fields}) VALUES ({placeholders})",
            list(doc.values()),
        )
        self._db.commit()
        Slogger.log(f"{type(self).__name__}.add: Stored id={record.id}")
        return self.by_id(record.id)

    def update(self, record_id: str, updates: Mapping[str, Any]) -> bool:
        """Partial update; returns True when a row changed."""
        unknown = set(updates) - set(self.writable_columns)
        if unknown:
            raise ValueError(f"Cannot update column(s) {sorted(unknown)} on {self.table}")
        if not updates:
            return False

        set_clauses = []
        params: List[Any] = []
        for key, value in updates.items():
            set_clauses.append(f"{key} = ?")
            params.append(value.isoformat() if isinstance(value, datetime) else value)
        params.append(record_id)

        cursor = self._db.cursor()
        cursor.execute(f"UPDATE {self.table} SET {', '.join(set_clauses)} WHERE id = ?", params)
        self._db.commit()

        success = cursor.rowcount > 0
        Slogger.log(
            f"{type(self).__name__}.update: id={record_id} fields={', '.join(updates)} success={success}"
        )
        return success

    def delete(self, record_id: str) -> bool:
        """Delete a record; returns False when nothing matched."""
        cursor = self._db.cursor()
        cursor.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
        self._db.commit()

        success = cursor.rowcount > 0
        if success:
            Slogger.log(f"{type(self).__name__}.delete: Deleted id={record_id}")
        else:
            Slogger.log(f"{type(self).__name__}.delete: No rows affected, id={record_id} may not exist")
        return success
