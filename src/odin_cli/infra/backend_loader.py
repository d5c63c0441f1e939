"""Infrastructure: locate the collaborator backend.

The project generator, dev server, bundler, configuration writer and
login flow live outside this package.  A backend distribution registers
an object satisfying :class:`~odin_cli.core.protocols.OdinBackend` under
the ``odin_cli.backends`` entry-point group, e.g.::

    [project.entry-points."odin_cli.backends"]
    default = "odin_backend:Backend"

The entry point may resolve to a backend instance or to a zero-argument
factory (such as a class).  When several backends are installed the
``ODIN_BACKEND`` environment variable selects one by name.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from odin_cli.core.protocols import OdinBackend
from odin_cli.exceptions import BackendNotFoundError

ENTRY_POINT_GROUP: str = "odin_cli.backends"
BACKEND_ENV_VAR: str = "ODIN_BACKEND"


def _available() -> dict[str, EntryPoint]:
    return {ep.name: ep for ep in entry_points(group=ENTRY_POINT_GROUP)}


def load_backend(environ: Mapping[str, str] | None = None) -> OdinBackend:
    """Load and instantiate the configured backend.

    Raises
    ------
    BackendNotFoundError
        When no backend is installed, the selected name is unknown, or
        several are installed and none is selected.
    """
    env = os.environ if environ is None else environ
    available = _available()
    if not available:
        raise BackendNotFoundError(
            "No Odin backend is installed.",
            hint=f"Install a package providing the '{ENTRY_POINT_GROUP}' entry point.",
        )

    selected = env.get(BACKEND_ENV_VAR)
    if selected:
        if selected not in available:
            raise BackendNotFoundError(
                f"Odin backend '{selected}' is not installed.",
                hint=f"Installed backends: {', '.join(sorted(available))}",
            )
        entry_point = available[selected]
    elif len(available) == 1:
        entry_point = next(iter(available.values()))
    else:
        raise BackendNotFoundError(
            "Several Odin backends are installed.",
            hint=f"Select one with {BACKEND_ENV_VAR}: {', '.join(sorted(available))}",
        )

    loaded: Any = entry_point.load()
    return loaded() if callable(loaded) else loaded
