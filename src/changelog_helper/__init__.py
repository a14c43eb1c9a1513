"""
Top-level package for changelog_helper.

This package exposes the main CLI entry point via the
``changelog_helper.cli`` module. The classification engine lives in
:mod:`changelog_helper.grouping` and has no I/O of its own.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
