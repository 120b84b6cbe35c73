# ipam_console/db/repos/subnet_repo.py
"""
Repository for subnet records.
"""

from __future__ import annotations

from ipam_console.db.repos.base_repo import TableRepo
from ipam_console.models.subnet import Subnet


class SubnetRepo(TableRepo[Subnet]):
    """CRUD access for subnets, joined with their VLAN number."""

    table = "subnets"
    model = Subnet
    columns_sql = "subnets.*, vlans.vlan_number AS vlan_number"
    from_sql = "subnets LEFT JOIN vlans ON vlans.id = subnets.vlan_id"
    order_by = "subnets.cidr ASC"
    search_columns = ("subnets.cidr", "subnets.name", "subnets.description")
    filter_columns = {"vlan_id": "subnets.vlan_id"}
    writable_columns = ("name", "description", "vlan_id", "dhcp_enabled")
