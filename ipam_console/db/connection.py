# ipam_console/db/connection.py

"""
SQLite connection handler
"""

import sqlite3
from pathlib import Path

from simple_logger import Slogger

SCHEMA = """
    CREATE TABLE IF NOT EXISTS vlans (
        id TEXT PRIMARY KEY,
        vlan_number INTEGER NOT NULL UNIQUE,
        name TEXT,
        description TEXT
    );

    CREATE TABLE IF NOT EXISTS subnets (
        id TEXT PRIMARY KEY,
        cidr TEXT NOT NULL UNIQUE,
        name TEXT,
        description TEXT,
        vlan_id TEXT,
        dhcp_enabled INTEGER DEFAULT 0,
        FOREIGN KEY (vlan_id) REFERENCES vlans(id)
    );

    CREATE TABLE IF NOT EXISTS audit_logs (
        id TEXT PRIMARY KEY,
        user_id TEXT,
        username TEXT,
        action TEXT NOT NULL,
        timestamp TEXT NOT NULL,
        details TEXT
    );
"""


class SQLiteConnection:
    """
    Handles basic connection to SQLite
    """

    def __init__(self, config):
        """
        Initialize SQLite connection

        Args:
            config: Configuration dictionary containing SQLite settings
        """
        db_path_str = config["sqlite"]["db_path"]

        if db_path_str != ":memory:":
            db_path = Path(db_path_str)
            if not db_path.parent.exists():
                Slogger.log(f"Creating database directory: {db_path.parent}")
                db_path.parent.mkdir(parents=True, exist_ok=True)

        Slogger.log(f"Opening SQLite database: {db_path_str}")
        self.conn = sqlite3.connect(db_path_str)
        # Enable foreign keys
        self.conn.execute("PRAGMA foreign_keys = ON")
        # Return rows as dictionaries
        self.conn.row_factory = sqlite3.Row

        self.ensure_schema()

    def ensure_schema(self):
        """Create any missing tables."""
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def cursor(self):
        """
        Get a cursor for database operations

        Returns:
            SQLite cursor
        """
        return self.conn.cursor()

    def commit(self):
        """Commit the current transaction"""
        self.conn.commit()

    def rollback(self):
        """Discard the current transaction"""
        self.conn.rollback()

    def close(self):
        """Close the connection"""
        self.conn.close()
