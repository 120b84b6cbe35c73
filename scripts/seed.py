#!/usr/bin/env python3
"""
Fill the configured SQLite database with demo VLANs, subnets and audit entries
so the list screens have several pages to walk through.
"""

import argparse
import os
import sys
from datetime import datetime, timedelta, timezone

# Add the parent directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ipam_console.config import load_config
from ipam_console.di import build_container
from ipam_console.models.audit_log import AuditLogEntry
from ipam_console.models.subnet import Subnet
from ipam_console.models.vlan import Vlan
from simple_logger import Slogger


def seed(container, vlans: int = 23, subnets_per_vlan: int = 2, audit_entries: int = 35):
    """Insert demo rows; returns (vlan_count, subnet_count, audit_count)."""
    vlan_repo = container.vlan_repo
    subnet_repo = container.subnet_repo
    audit_repo = container.audit_log_repo

    created_vlans = []
    for i in range(vlans):
        number = 100 + i * 10
        created_vlans.append(vlan_repo.add(Vlan(
            id="",
            vlan_number=number,
            name=f"vlan-{number}",
            description=f"Demo VLAN {number}",
        )))

    subnet_count = 0
    for i, vlan in enumerate(created_vlans):
        # the last few VLANs stay unused so they can be deleted
        if i >= len(created_vlans) - 3:
            continue
        for j in range(subnets_per_vlan):
            subnet_repo.add(Subnet(
                id="",
                cidr=f"10.{i}.{j}.0/24",
                name=f"net-{i}-{j}",
                description=f"Demo subnet on VLAN {vlan.vlan_number}",
                vlan_id=vlan.id,
                dhcp_enabled=j % 2 == 0,
            ))
            subnet_count += 1

    start = datetime.now(timezone.utc) - timedelta(days=audit_entries)
    for i in range(audit_entries):
        audit_repo.add(AuditLogEntry(
            id="",
            action="seed",
            username="admin",
            user_id="user_admin_001",
            timestamp=start + timedelta(days=i),
            details=f"Demo audit entry #{i + 1}",
        ))

    return len(created_vlans), subnet_count, audit_entries


def main():
    parser = argparse.ArgumentParser(description="Seed the IPAM console database with demo data")
    parser.add_argument("--vlans", type=int, default=23, help="number of VLANs to create")
    parser.add_argument("--subnets-per-vlan", type=int, default=2)
    parser.add_argument("--audit-entries", type=int, default=35)
    args = parser.parse_args()

    config = load_config()
    container = build_container(config)
    try:
        counts = seed(container, args.vlans, args.subnets_per_vlan, args.audit_entries)
    finally:
        container.close()

    Slogger.info("Seeded demo data", {"vlans": counts[0], "subnets": counts[1], "audit_entries": counts[2]})
    print(f"Seeded {counts[0]} VLANs, {counts[1]} subnets and {counts[2]} audit entries "
          f"into {config['sqlite']['db_path']}")


if __name__ == "__main__":
    main()
