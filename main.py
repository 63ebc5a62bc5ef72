#!/usr/bin/env python3
"""
DNS Alias Manager - Main Entry Point

This is the main entry point for the DNS Alias Manager.
It can be run directly or imported as a module.
"""

import sys

from dns_alias_manager.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
