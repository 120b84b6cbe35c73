"""IPAM console data models."""

from ipam_console.models.audit_log import AuditLogEntry
from ipam_console.models.pagination import PaginatedResult, count_pages
from ipam_console.models.permissions import Permission, ResourcePermissions, RESOURCE_PERMISSIONS
from ipam_console.models.query import Query, DEFAULT_PAGE_SIZE
from ipam_console.models.results import ActionResult, ItemFailure
from ipam_console.models.subnet import Subnet
from ipam_console.models.user import CurrentUser, GUEST_USER
from ipam_console.models.vlan import Vlan

__all__ = [
    "AuditLogEntry",
    "PaginatedResult",
    "count_pages",
    "Permission",
    "ResourcePermissions",
    "RESOURCE_PERMISSIONS",
    "Query",
    "DEFAULT_PAGE_SIZE",
    "ActionResult",
    "ItemFailure",
    "Subnet",
    "CurrentUser",
    "GUEST_USER",
    "Vlan",
]
