"""Execution domain classification.

A file's domain comes from the directory names in its path: the segment
named client, server or shared that sits nearest the file wins. Files with
no such segment are shared.

    app/server/shared/x.js  -> shared
    app/shared/server/x.js  -> server
    lib/x.js                -> shared
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ExecutionDomain(str, Enum):
    """Where a file runs. Files may only require files of the same domain."""

    CLIENT = "client"
    SERVER = "server"
    SHARED = "shared"


DEFAULT_DOMAIN = ExecutionDomain.SHARED

_DOMAINS_BY_NAME: dict[str, ExecutionDomain] = {d.value: d for d in ExecutionDomain}


def classify_domain(path: Path) -> ExecutionDomain:
    """Return the execution domain of path (nearest matching segment wins)."""
    for segment in reversed(path.parts):
        domain = _DOMAINS_BY_NAME.get(segment)
        if domain is not None:
            return domain
    return DEFAULT_DOMAIN
