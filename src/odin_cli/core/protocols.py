"""Protocols (interfaces) consumed by the core and CLI layers.

These define the contracts that collaborators and terminal adapters
must satisfy.  Core code depends ONLY on these protocols, never on
concrete implementations, so the engine runs in tests without a real
terminal or project generator.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

from odin_cli.core.models import NewProjectOptions, ServeOptions


class OdinBackend(Protocol):
    """Contract for the collaborator backend doing the actual work.

    Any method may return an awaitable; the dispatch wrapper awaits it to
    completion.  Backends report failures by raising and never print
    their own success or failure banners.
    """

    def new_project(self, options: NewProjectOptions) -> Awaitable[None] | None:
        """Scaffold a project from *options* in the working directory."""
        ...  # pragma: no cover

    def serve_project(self, options: ServeOptions) -> Awaitable[None] | None:
        """Run the development server until it stops."""
        ...  # pragma: no cover

    def build_project(self) -> Awaitable[None] | None:
        """Produce a production build of the project in the working directory."""
        ...  # pragma: no cover

    def set_configuration(self, key: str, value: str) -> Awaitable[None] | None:
        """Persist one configuration value of the existing project."""
        ...  # pragma: no cover

    def login(self) -> Awaitable[None] | None:
        """Run the browser based login flow for the configured environment."""
        ...  # pragma: no cover


class Prompter(Protocol):
    """Terminal I/O capability used by the question sequences.

    Implementations raise :class:`KeyboardInterrupt` when the user
    cancels a prompt.
    """

    def text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Callable[[str], str | None] | None = None,
    ) -> str:
        """Ask for free text.  *validate* returns a rejection reason or ``None``."""
        ...  # pragma: no cover

    def select(
        self,
        message: str,
        *,
        choices: Sequence[tuple[str, str]],
        default: str | None = None,
    ) -> str:
        """Ask for one of *choices* given as ``(title, value)`` pairs; return the value."""
        ...  # pragma: no cover

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...  # pragma: no cover

    def reject(self, reason: str) -> None:
        """Tell the user why the previous answer was refused."""
        ...  # pragma: no cover


BackendFactory = Callable[[], OdinBackend]
"""Zero-argument callable producing the backend on first use."""

AnswerMap = dict[str, Any]
