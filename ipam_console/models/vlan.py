"""Domain model for a VLAN."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Vlan:
    id: str
    vlan_number: int
    name: Optional[str] = None
    description: Optional[str] = None
    subnet_count: int = 0

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Vlan":
        return cls(
            id=str(row["id"]),
            vlan_number=int(row.get("vlan_number") or 0),
            name=row.get("name"),
            description=row.get("description"),
            subnet_count=int(row.get("subnet_count") or 0),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        # subnet_count is derived, never stored
        return {
            "id": self.id,
            "vlan_number": self.vlan_number,
            "name": self.name,
            "description": self.description,
        }

    @property
    def label(self) -> str:
        return f"VLAN {self.vlan_number} ({self.name or 'unnamed'})"
