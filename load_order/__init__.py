"""Load order source package.

This package resolves the order source files must be loaded in:
- config: Configuration loading and management
- resolver: Directive parsing, domain classification and dependency ordering
"""

from __future__ import annotations

from .resolver import resolve_directory, resolve_directory_tree

__all__: list[str] = ["resolve_directory", "resolve_directory_tree"]
