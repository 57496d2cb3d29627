"""
Hello API CLI

Run scripts for the Hello JSON API server.

Usage:
    python -m hello_cli start [--port N]
    python -m hello_cli dev [--port N] [--reload-dir DIR]
"""

__version__ = "0.1.0"
