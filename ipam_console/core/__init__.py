"""State machine shared by every paginated list screen."""

from ipam_console.core.entity_controller import EntityManagementController
from ipam_console.core.mutations import MutationCoordinator, MutationOutcome, MutationStatus
from ipam_console.core.navigator import PageNavigator
from ipam_console.core.permission_gate import Capabilities, PermissionGate, DEFAULT_GATE
from ipam_console.core.query_store import QueryStringStore
from ipam_console.core.selection import SelectionLevel, SelectionTracker, Tristate
from ipam_console.core.session import UserSession

__all__ = [
    "EntityManagementController",
    "MutationCoordinator",
    "MutationOutcome",
    "MutationStatus",
    "PageNavigator",
    "Capabilities",
    "PermissionGate",
    "DEFAULT_GATE",
    "QueryStringStore",
    "SelectionLevel",
    "SelectionTracker",
    "Tristate",
    "UserSession",
]
