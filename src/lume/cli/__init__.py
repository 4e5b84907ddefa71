"""
Lume Command-Line Interface
===========================

This package provides command-line tools for the Lume toolchain:

- **lumelex**: Token stream dump for Lume source files

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["lumelex"]
