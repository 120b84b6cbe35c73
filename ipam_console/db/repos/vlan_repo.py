# ipam_console/db/repos/vlan_repo.py
"""
Repository for VLAN records.
"""

from __future__ import annotations

from ipam_console.db.repos.base_repo import TableRepo
from ipam_console.errors import RecordInUse
from ipam_console.models.vlan import Vlan
from simple_logger import Slogger


class VlanRepo(TableRepo[Vlan]):
    """CRUD access for VLANs, with the number of subnets using each one."""

    table = "vlans"
    model = Vlan
    columns_sql = (
        "vlans.*, "
        "(SELECT COUNT(*) FROM subnets WHERE subnets.vlan_id = vlans.id) AS subnet_count"
    )
    order_by = "vlans.vlan_number ASC"
    search_columns = ("CAST(vlans.vlan_number AS TEXT)", "vlans.name", "vlans.description")
    writable_columns = ("vlan_number", "name", "description")

    def subnet_count(self, vlan_id: str) -> int:
        cursor = self._db.cursor()
        cursor.execute("SELECT COUNT(*) FROM subnets WHERE vlan_id = ?", (vlan_id,))
        return cursor.fetchone()[0]

    def delete(self, record_id: str) -> bool:
        """Refuse to delete a VLAN that subnets still reference."""
        in_use = self.subnet_count(record_id)
        if in_use:
            vlan = self.by_id(record_id)
            label = vlan.label if vlan else record_id
            Slogger.log(f"VlanRepo.delete: {label} still used by {in_use} subnet(s)")
            raise RecordInUse(
                f"{label} is still assigned to {in_use} subnet(s). Reassign them first.",
                code="VLAN_IN_USE",
                field="vlan_id",
            )
        return super().delete(record_id)
