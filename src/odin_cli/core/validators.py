"""Input validators shared by direct (flag) mode and wizard mode.

Each predicate is the single source of truth for its input: the command
router and the interactive question sequences call the same functions,
so both paths accept exactly the same values.

Validators are pure except for :func:`validate_project_name`, which
probes the working directory passed in by the caller.
"""

from __future__ import annotations

import re
from pathlib import Path

_PROXY_URL_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*://[^\s/:?#]+(?::[0-9]+)?/?")
_PROJECT_NAME_RE = re.compile(r"[a-zA-Z0-9-]+")
_PORT_RE = re.compile(r"[0-9]+")

PROJECT_NAME_CHARACTERS_REASON = "The project name can only have letters, numbers and dashes"
PROJECT_EXISTS_REASON = "The directory already exists."
PORT_REASON = "The port must be a number, e.g 8080"
PROXY_URL_REASON = "The URL must look like the following: protocol://hostname:port"


def is_valid_proxy_url(value: str) -> bool:
    """Return ``True`` iff *value* looks like ``protocol://hostname[:port]``."""
    return _PROXY_URL_RE.fullmatch(value) is not None


def is_valid_port(value: str) -> bool:
    """Return ``True`` iff *value* is a non-empty digit string.

    No range check: ``0`` and ``99999`` are both accepted.
    """
    return _PORT_RE.fullmatch(value) is not None


def validate_project_name(name: str, cwd: Path) -> str | None:
    """Check a project name against the naming rule and the working directory.

    Returns
    -------
    str | None
        ``None`` when the name is usable, otherwise the rejection reason
        to show the user verbatim.
    """
    if _PROJECT_NAME_RE.fullmatch(name) is None:
        return PROJECT_NAME_CHARACTERS_REASON
    if (cwd / name).exists():
        return PROJECT_EXISTS_REASON
    return None


def validate_port(value: str) -> str | None:
    """Wizard adapter for :func:`is_valid_port`."""
    return None if is_valid_port(value) else PORT_REASON


def validate_proxy_url(value: str) -> str | None:
    """Wizard adapter for :func:`is_valid_proxy_url`."""
    return None if is_valid_proxy_url(value) else PROXY_URL_REASON
