"""Domain model for a subnet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Subnet:
    id: str
    cidr: str
    name: Optional[str] = None
    description: Optional[str] = None
    vlan_id: Optional[str] = None
    vlan_number: Optional[int] = None
    dhcp_enabled: bool = False

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Subnet":
        vlan_number = row.get("vlan_number")
        return cls(
            id=str(row["id"]),
            cidr=row.get("cidr", ""),
            name=row.get("name"),
            description=row.get("description"),
            vlan_id=row.get("vlan_id"),
            vlan_number=int(vlan_number) if vlan_number is not None else None,
            dhcp_enabled=bool(row.get("dhcp_enabled")),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cidr": self.cidr,
            "name": self.name,
            "description": self.description,
            "vlan_id": self.vlan_id,
            "dhcp_enabled": 1 if self.dhcp_enabled else 0,
        }

    @property
    def label(self) -> str:
        return f"{self.cidr} ({self.name or 'unnamed'})"
