#!/usr/bin/env python3
"""
IPAM Console - Main entry point
"""
import sys
import os

# Add the parent directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from simple_logger import Slogger
from ipam_console.ui.app import IpamConsoleApp
from ipam_console.config import load_config


def main():
    # Load configuration
    config = load_config()

    logging_cfg = config.get("logging", {})
    Slogger.configure(logging_cfg.get("path"), logging_cfg.get("level"))
    Slogger.log("Starting IPAM console...")

    # Create and run the application
    app = IpamConsoleApp(config)
    app.run()

if __name__ == "__main__":
    main()
