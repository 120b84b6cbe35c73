"""Domain model for an audit log entry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


def _parse_date(value: Any) -> Optional[datetime]:
    """Convert various inputs → datetime | None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class AuditLogEntry:
    id: str
    action: str
    username: Optional[str] = None
    user_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    details: Optional[str] = None

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "AuditLogEntry":
        return cls(
            id=str(row["id"]),
            action=row.get("action", ""),
            username=row.get("username"),
            user_id=row.get("user_id"),
            timestamp=_parse_date(row.get("timestamp")),
            details=row.get("details"),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "action": self.action,
            "username": self.username,
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "details": self.details,
        }

    @property
    def label(self) -> str:
        return f"{self.action} by {self.username or 'unknown'}"
