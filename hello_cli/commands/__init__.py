"""
CLI command modules.
"""

from hello_cli.commands import start, dev

__all__ = ["start", "dev"]
