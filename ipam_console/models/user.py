"""Domain model for the acting user."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

from ipam_console.models.permissions import permissions_for_role

GUEST_USER_ID = "guest-fallback-id"
GUEST_USERNAME = "Guest"


@dataclass(frozen=True, slots=True)
class CurrentUser:
    id: str
    username: str
    role_name: str = ""
    permissions: Optional[FrozenSet[str]] = field(default_factory=frozenset)
    email: str = ""
    # placeholder users stand in while nobody is signed in
    is_placeholder: bool = False

    @property
    def is_guest(self) -> bool:
        return self.is_placeholder or (
            self.id == GUEST_USER_ID and self.username == GUEST_USERNAME
        )

    # ---------- mappings ----------
    @classmethod
    def for_role(cls, user_id: str, username: str, role_name: str, *, email: str = "") -> "CurrentUser":
        """Resolve permissions from the static role mapping."""
        return cls(
            id=user_id,
            username=username,
            role_name=role_name,
            permissions=permissions_for_role(role_name),
            email=email,
        )

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> "CurrentUser":
        permissions = doc.get("permissions")
        if permissions is None:
            resolved = permissions_for_role(doc.get("roleName") or doc.get("role_name"))
        else:
            resolved = frozenset(permissions)
        return cls(
            id=str(doc.get("id", "")),
            username=doc.get("username", ""),
            role_name=doc.get("roleName") or doc.get("role_name") or "",
            permissions=resolved,
            email=doc.get("email", ""),
        )


GUEST_USER = CurrentUser(
    id=GUEST_USER_ID,
    username=GUEST_USERNAME,
    role_name=GUEST_USERNAME,
    permissions=frozenset(),
    is_placeholder=True,
)
