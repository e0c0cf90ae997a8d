#!/usr/bin/env python3
"""
Convenience entry point for running careslots as a module.

Usage: python -m careslots [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
