"""Infrastructure: Odin project marker detection.

An initialised project is recognised by its configuration file
(``odin.json``) in the working directory.  Commands that operate on an
existing project (``serve``, ``build``) require it.

Rules
-----
* Detection is a plain existence check; the file is never parsed here.
* The working directory is always passed in; nothing reads
  :func:`os.getcwd` in this module.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from odin_cli.exceptions import MissingProjectError

MARKER_FILE_NAME: str = "odin.json"


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProjectStatus:
    """Result of a project marker probe.

    Attributes
    ----------
    found : bool
        Whether the marker file exists in the probed directory.
    marker : Path
        Where the marker file was looked for.
    """

    found: bool
    marker: Path


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_project(cwd: Path) -> ProjectStatus:
    """Probe *cwd* for the project marker file."""
    marker = cwd / MARKER_FILE_NAME
    return ProjectStatus(found=marker.is_file(), marker=marker)


def require_project(cwd: Path) -> Path:
    """Return the marker path or raise :class:`MissingProjectError`."""
    status = detect_project(cwd)
    if not status.found:
        raise MissingProjectError(
            "Could not find an Odin configuration file.",
            hint=f"Run this command in a project directory containing {MARKER_FILE_NAME}.",
        )
    return status.marker
