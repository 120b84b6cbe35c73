# ipam_console/ui/screens/resources.py
"""
Per-resource descriptions of the list screens: which columns to show, how a
record becomes a row and which capability keys guard it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Tuple

from ipam_console.models.audit_log import AuditLogEntry
from ipam_console.models.permissions import RESOURCE_PERMISSIONS, ResourcePermissions
from ipam_console.models.subnet import Subnet
from ipam_console.models.vlan import Vlan
from ipam_console.utils.formatters import format_date, format_flag, truncate_text

RowFormatter = Callable[[Any, str], Tuple[str, ...]]


@dataclass(frozen=True)
class ResourceDefinition:
    key: str
    title: str
    item_label: str
    plural: str
    permissions: ResourcePermissions
    columns: Tuple[str, ...]
    row: RowFormatter
    # attribute of the DI container that provides the service
    service_attr: str
    search_placeholder: str = "Search..."


def _vlan_row(vlan: Vlan, date_format: str) -> Tuple[str, ...]:
    return (
        str(vlan.vlan_number),
        vlan.name or "",
        truncate_text(vlan.description or "", 40),
        str(vlan.subnet_count),
    )


def _subnet_row(subnet: Subnet, date_format: str) -> Tuple[str, ...]:
    return (
        subnet.cidr,
        subnet.name or "",
        "" if subnet.vlan_number is None else str(subnet.vlan_number),
        format_flag(subnet.dhcp_enabled),
        truncate_text(subnet.description or "", 40),
    )


def _audit_row(entry: AuditLogEntry, date_format: str) -> Tuple[str, ...]:
    return (
        format_date(entry.timestamp, date_format),
        entry.username or "",
        entry.action,
        truncate_text(entry.details or "", 60),
    )


VLANS = ResourceDefinition(
    key="vlans",
    title="VLANs",
    item_label="VLAN",
    plural="VLANs",
    permissions=RESOURCE_PERMISSIONS["vlan"],
    columns=("Number", "Name", "Description", "Subnets"),
    row=_vlan_row,
    service_attr="vlan_service",
    search_placeholder="Search VLANs by name or description...",
)

SUBNETS = ResourceDefinition(
    key="subnets",
    title="Subnets",
    item_label="subnet",
    plural="subnets",
    permissions=RESOURCE_PERMISSIONS["subnet"],
    columns=("CIDR", "Name", "VLAN", "DHCP", "Description"),
    row=_subnet_row,
    service_attr="subnet_service",
    search_placeholder="Search subnets by CIDR, name or description...",
)

AUDIT_LOGS = ResourceDefinition(
    key="audit_logs",
    title="Audit log",
    item_label="audit entry",
    plural="audit entries",
    permissions=RESOURCE_PERMISSIONS["auditlog"],
    columns=("Time", "User", "Action", "Details"),
    row=_audit_row,
    service_attr="audit_log_service",
    search_placeholder="Search the audit log...",
)

RESOURCE_SCREENS: Tuple[ResourceDefinition, ...] = (VLANS, SUBNETS, AUDIT_LOGS)
