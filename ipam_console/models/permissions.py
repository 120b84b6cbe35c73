"""Capability keys and the static role -> permission mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional


class Permission:
    """Capability keys, `<resource>.<action>`."""

    VIEW_DASHBOARD = "dashboard.view"

    VIEW_SUBNET = "subnet.view"
    CREATE_SUBNET = "subnet.create"
    EDIT_SUBNET = "subnet.edit"
    DELETE_SUBNET = "subnet.delete"

    VIEW_VLAN = "vlan.view"
    CREATE_VLAN = "vlan.create"
    EDIT_VLAN = "vlan.edit"
    DELETE_VLAN = "vlan.delete"

    VIEW_IPADDRESS = "ipaddress.view"
    CREATE_IPADDRESS = "ipaddress.create"
    EDIT_IPADDRESS = "ipaddress.edit"
    DELETE_IPADDRESS = "ipaddress.delete"

    VIEW_AUDIT_LOG = "auditlog.view"
    DELETE_AUDIT_LOG = "auditlog.delete"

    VIEW_DEVICE_DICTIONARY = "dictionary.device.view"
    CREATE_DEVICE_DICTIONARY = "dictionary.device.create"
    EDIT_DEVICE_DICTIONARY = "dictionary.device.edit"
    DELETE_DEVICE_DICTIONARY = "dictionary.device.delete"

    VIEW_PAYMENT_SOURCE_DICTIONARY = "dictionary.payment_source.view"
    CREATE_PAYMENT_SOURCE_DICTIONARY = "dictionary.payment_source.create"
    EDIT_PAYMENT_SOURCE_DICTIONARY = "dictionary.payment_source.edit"
    DELETE_PAYMENT_SOURCE_DICTIONARY = "dictionary.payment_source.delete"

    VIEW_ACCESS_TYPE_DICTIONARY = "dictionary.access_type.view"
    CREATE_ACCESS_TYPE_DICTIONARY = "dictionary.access_type.create"
    EDIT_ACCESS_TYPE_DICTIONARY = "dictionary.access_type.edit"
    DELETE_ACCESS_TYPE_DICTIONARY = "dictionary.access_type.delete"

    VIEW_INTERFACE_TYPE_DICTIONARY = "dictionary.interface_type.view"
    CREATE_INTERFACE_TYPE_DICTIONARY = "dictionary.interface_type.create"
    EDIT_INTERFACE_TYPE_DICTIONARY = "dictionary.interface_type.edit"
    DELETE_INTERFACE_TYPE_DICTIONARY = "dictionary.interface_type.delete"

    @classmethod
    def all(cls) -> FrozenSet[str]:
        return frozenset(
            value for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, str)
        )


ALL_PERMISSIONS: FrozenSet[str] = Permission.all()


@dataclass(frozen=True, slots=True)
class ResourcePermissions:
    """The four standard capability keys of one list screen."""

    view: str
    create: Optional[str] = None
    edit: Optional[str] = None
    delete: Optional[str] = None

    @classmethod
    def for_resource(
        cls, resource: str, actions: Iterable[str] = ("view", "create", "edit", "delete")
    ) -> "ResourcePermissions":
        keys = {action: f"{resource}.{action}" for action in actions}
        if "view" not in keys:
            raise ValueError(f"resource '{resource}' needs a view capability")
        return cls(**keys)


RESOURCE_PERMISSIONS: Dict[str, ResourcePermissions] = {
    "subnet": ResourcePermissions.for_resource("subnet"),
    "vlan": ResourcePermissions.for_resource("vlan"),
    "ipaddress": ResourcePermissions.for_resource("ipaddress"),
    "auditlog": ResourcePermissions.for_resource("auditlog", ("view", "delete")),
    "dictionary.device": ResourcePermissions.for_resource("dictionary.device"),
    "dictionary.payment_source": ResourcePermissions.for_resource("dictionary.payment_source"),
    "dictionary.access_type": ResourcePermissions.for_resource("dictionary.access_type"),
    "dictionary.interface_type": ResourcePermissions.for_resource("dictionary.interface_type"),
}

_NETWORK_RESOURCES = ("subnet", "vlan", "ipaddress")

ROLE_PERMISSIONS: Dict[str, FrozenSet[str]] = {
    "Administrator": ALL_PERMISSIONS,
    "Operator": frozenset(
        {Permission.VIEW_DASHBOARD, Permission.VIEW_AUDIT_LOG}
        | {f"{r}.{a}" for r in _NETWORK_RESOURCES for a in ("view", "create", "edit")}
        | {key for key in ALL_PERMISSIONS if key.startswith("dictionary.") and key.endswith(".view")}
    ),
    "Viewer": frozenset(
        {Permission.VIEW_DASHBOARD}
        | {f"{r}.view" for r in _NETWORK_RESOURCES}
    ),
}


def permissions_for_role(role_name: Optional[str]) -> FrozenSet[str]:
    """Unknown roles resolve to no permissions at all."""
    return ROLE_PERMISSIONS.get(role_name or "", frozenset())
