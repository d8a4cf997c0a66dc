#!/usr/bin/env python3
"""
Main entry point for the add-on updater when run as a module.

This allows the package to be executed with: python -m addon_updater
"""

from .cli import main

if __name__ == '__main__':
    main()
