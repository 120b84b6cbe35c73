# ipam_console/core/permission_gate.py
"""
Capability checks for list screens.

Everything here fails closed: a missing user, a missing permission set, the
guest placeholder and keys outside the catalogue all answer False.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Optional

from ipam_console.models.permissions import ALL_PERMISSIONS, ResourcePermissions


class PermissionGate:
    """Pure predicate over the acting user's capability set."""

    def __init__(self, known_keys: Iterable[str] = ALL_PERMISSIONS) -> None:
        self._known: FrozenSet[str] = frozenset(known_keys)

    def check(self, user: Any, key: Optional[str]) -> bool:
        if user is None or not key:
            return False
        if getattr(user, "is_guest", False):
            return False
        permissions = getattr(user, "permissions", None)
        if not permissions:
            return False
        if key not in self._known:
            return False
        return key in permissions

    def project(self, user: Any, keys: ResourcePermissions) -> "Capabilities":
        return Capabilities(
            can_view=self.check(user, keys.view),
            can_create=self.check(user, keys.create),
            can_edit=self.check(user, keys.edit),
            can_delete=self.check(user, keys.delete),
        )


DEFAULT_GATE = PermissionGate()


def check(user: Any, key: Optional[str]) -> bool:
    """Module-level shortcut for the default gate."""
    return DEFAULT_GATE.check(user, key)


@dataclass(frozen=True, slots=True)
class Capabilities:
    """What the acting user may do on one list screen."""

    can_view: bool = False
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False

    @property
    def can_select(self) -> bool:
        # row checkboxes only exist to feed batch deletes
        return self.can_delete


NO_CAPABILITIES = Capabilities()
