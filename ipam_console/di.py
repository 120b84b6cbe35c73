# ipam_console/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Dict

from ipam_console.core.session import UserSession
from ipam_console.db.connection import SQLiteConnection
from ipam_console.db.repos.audit_log_repo import AuditLogRepo
from ipam_console.db.repos.subnet_repo import SubnetRepo
from ipam_console.db.repos.vlan_repo import VlanRepo
from ipam_console.models.audit_log import AuditLogEntry
from ipam_console.models.subnet import Subnet
from ipam_console.models.vlan import Vlan
from ipam_console.services.audit_trail import AuditTrail
from ipam_console.services.resource_service import ResourceService


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any], session: UserSession | None = None) -> None:
        self._cfg = config
        self.session = session or UserSession()
        self._db: SQLiteConnection | None = None
        self._vlan_repo: VlanRepo | None = None
        self._subnet_repo: SubnetRepo | None = None
        self._audit_log_repo: AuditLogRepo | None = None
        self._audit_trail: AuditTrail | None = None
        self._vlan_service: ResourceService[Vlan] | None = None
        self._subnet_service: ResourceService[Subnet] | None = None
        self._audit_log_service: ResourceService[AuditLogEntry] | None = None

    @property
    def config(self) -> Dict[str, Any]:
        return self._cfg

    @property
    def page_size(self) -> int:
        return int(self._cfg.get("ui", {}).get("per_page", 10))

    # ---------- infra ----------
    @property
    def db(self) -> SQLiteConnection:
        if self._db is None:
            self._db = SQLiteConnection(self._cfg)
        return self._db

    # ---------- repositories ----------
    @property
    def vlan_repo(self) -> VlanRepo:
        if self._vlan_repo is None:
            self._vlan_repo = VlanRepo(self.db)
        return self._vlan_repo

    @property
    def subnet_repo(self) -> SubnetRepo:
        if self._subnet_repo is None:
            self._subnet_repo = SubnetRepo(self.db)
        return self._subnet_repo

    @property
    def audit_log_repo(self) -> AuditLogRepo:
        if self._audit_log_repo is None:
            self._audit_log_repo = AuditLogRepo(self.db)
        return self._audit_log_repo

    # ---------- services ----------
    @property
    def audit_trail(self) -> AuditTrail:
        if self._audit_trail is None:
            self._audit_trail = AuditTrail(self.audit_log_repo, self.session)
        return self._audit_trail

    @property
    def vlan_service(self) -> ResourceService[Vlan]:
        if self._vlan_service is None:
            self._vlan_service = ResourceService(self.vlan_repo, item_label="VLAN", audit=self.audit_trail)
        return self._vlan_service

    @property
    def subnet_service(self) -> ResourceService[Subnet]:
        if self._subnet_service is None:
            self._subnet_service = ResourceService(self.subnet_repo, item_label="subnet", audit=self.audit_trail)
        return self._subnet_service

    @property
    def audit_log_service(self) -> ResourceService[AuditLogEntry]:
        if self._audit_log_service is None:
            # pruning the log is not itself audited
            self._audit_log_service = ResourceService(self.audit_log_repo, item_label="audit entry")
        return self._audit_log_service

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None


# convenience factory
def build_container(config: Dict[str, Any], session: UserSession | None = None) -> Container:
    """Create a container for the given config."""
    return Container(config, session)
