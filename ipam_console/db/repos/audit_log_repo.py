# ipam_console/db/repos/audit_log_repo.py
"""
Repository for audit log entries.
"""

from __future__ import annotations

from ipam_console.db.repos.base_repo import TableRepo
from ipam_console.models.audit_log import AuditLogEntry


class AuditLogRepo(TableRepo[AuditLogEntry]):
    """Read and prune access for audit log entries, newest first."""

    table = "audit_logs"
    model = AuditLogEntry
    order_by = "audit_logs.timestamp DESC, audit_logs.id DESC"
    search_columns = ("audit_logs.username", "audit_logs.action", "audit_logs.details")
    filter_columns = {"username": "audit_logs.username", "action": "audit_logs.action"}
