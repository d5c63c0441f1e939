"""Infrastructure layer — working-directory probes and backend discovery.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Failures are raised as :class:`~odin_cli.exceptions.OdinError`
  subclasses.
"""

from odin_cli.infra.backend_loader import load_backend
from odin_cli.infra.project_detector import ProjectStatus, detect_project, require_project

__all__: list[str] = [
    "ProjectStatus",
    "detect_project",
    "load_backend",
    "require_project",
]
