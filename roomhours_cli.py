#!/usr/bin/env python3
"""
Convenience entry point for running roomhours directly.

Usage: python roomhours_cli.py [command] [options]
"""

from roomhours.cli.app import app

if __name__ == "__main__":
    app()
