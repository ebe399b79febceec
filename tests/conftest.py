"""Pytest fixtures for load_order tests.

Common fixtures for building source trees and resolving them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from load_order.config import reset_config

TreeFactory = Callable[[dict[str, str]], Path]


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "scenario(num): mark test as covering a documented resolution scenario. "
        "Usage: @pytest.mark.scenario(1)"
    )


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Make sure no test sees config loaded by another test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Factory that writes {relative path: content} into a fresh project root.

    Returns the root directory. Paths ending in "/" create empty directories.
    """
    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            if rel.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _make

