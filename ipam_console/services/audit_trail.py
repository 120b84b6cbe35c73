# ipam_console/services/audit_trail.py
"""
Writes an audit log entry for every record a mutation touches.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ipam_console.core.session import UserSession
from ipam_console.db.repos.audit_log_repo import AuditLogRepo
from ipam_console.models.audit_log import AuditLogEntry


class AuditTrail:
    """Attributes entries to whoever is signed in to the session."""

    def __init__(self, repo: AuditLogRepo, session: UserSession) -> None:
        self._repo = repo
        self._session = session

    def __call__(self, action: str, details: str) -> None:
        self.record(action, details)

    def record(self, action: str, details: str) -> AuditLogEntry:
        user = self._session.current_user
        return self._repo.add(
            AuditLogEntry(
                id="",
                action=action,
                username=user.username if user else None,
                user_id=user.id if user else None,
                timestamp=datetime.now(timezone.utc),
                details=details,
            )
        )
