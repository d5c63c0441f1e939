"""Dispatch wrapper — the single place collaborator outcomes are reported.

Every command reaches its collaborator through :class:`Dispatcher`.  The
wrapper prints the command's start banner, invokes the collaborator,
waits for a returned awaitable to finish, and prints the fixed success
message.  Any exception raised by the collaborator is printed verbatim
and converted to :class:`~odin_cli.exceptions.CommandFailedError`
carrying the command's fixed failure summary; the error boundary turns
that into exit code 1 without help text.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.markup import escape

from odin_cli.cli.console import console, err_console
from odin_cli.core.models import ConfigurationEdit, NewProjectOptions, ServeOptions
from odin_cli.core.protocols import BackendFactory, OdinBackend
from odin_cli.exceptions import CommandFailedError
from odin_cli.infra.project_detector import require_project

LOGIN_HINT = "Done! You can now start the development server with 'odin serve --multi-tenant'"


@dataclass(frozen=True, slots=True)
class Banners:
    """Fixed texts printed around one collaborator call."""

    success: Sequence[str]
    failure: str
    start: str | None = None


async def _wait(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


@contextmanager
def reporting(banners: Banners) -> Iterator[None]:
    """Report the outcome of the collaborator call made inside the block."""
    if banners.start:
        console.print(banners.start)
    try:
        yield
    except Exception as exc:
        err_console.print(f"[red]{escape(f'{type(exc).__name__}: {exc}')}[/red]")
        raise CommandFailedError(banners.failure) from exc
    for line in banners.success:
        console.print(line, markup=False, highlight=False)


class Dispatcher:
    """Invokes collaborators with resolved options.

    The backend is created on first use so usage and precondition errors
    never require one to be installed.
    """

    def __init__(self, backend_factory: BackendFactory, cwd: Path) -> None:
        self._backend_factory = backend_factory
        self._backend: OdinBackend | None = None
        self._cwd = cwd

    @property
    def backend(self) -> OdinBackend:
        if self._backend is None:
            self._backend = self._backend_factory()
        return self._backend

    def _run(self, banners: Banners, call: Callable[[OdinBackend], Any]) -> None:
        backend = self.backend
        with reporting(banners):
            result = call(backend)
            if inspect.isawaitable(result):
                asyncio.run(_wait(result))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def new_project(self, options: NewProjectOptions) -> None:
        banners = Banners(
            success=(
                "Done!",
                "To continue with the new project, install dependencies and start the server:",
                f"\tcd {options.name}",
                "\tnpm install",
                "\todin serve",
            ),
            failure="Failed to create new project",
        )
        self._run(banners, lambda backend: backend.new_project(options))

    def serve_project(self, options: ServeOptions) -> None:
        require_project(self._cwd)
        banners = Banners(
            start="Starting Dev Server...",
            success=("Dev server stopped.",),
            failure="Serving was aborted because of an error",
        )
        self._run(banners, lambda backend: backend.serve_project(options))

    def build_project(self) -> None:
        require_project(self._cwd)
        banners = Banners(
            start="Building project...",
            success=("Project built successfully",),
            failure="Build failed",
        )
        self._run(banners, lambda backend: backend.build_project())

    def set_configuration(self, edit: ConfigurationEdit) -> None:
        banners = Banners(
            success=(f"Configuration updated: {edit.key} = {edit.value}",),
            failure="Configuration failed",
        )
        self._run(banners, lambda backend: backend.set_configuration(edit.key, edit.value))

    def login(self) -> None:
        banners = Banners(
            start=(
                "Logging in to the configured environment. "
                "A separate browser window will open with the login screen."
            ),
            success=(LOGIN_HINT,),
            failure="Login failed",
        )
        self._run(banners, lambda backend: backend.login())
