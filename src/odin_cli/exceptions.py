"""Custom exception hierarchy for odin-cli.

All exceptions that cross layer boundaries must inherit from
:class:`OdinError`.  The CLI error boundary decides how each branch of
the hierarchy is rendered: usage errors are followed by the help text,
everything else is reported without it.

Hierarchy
---------
OdinError
├── UsageError
│   ├── UnknownCommandError
│   ├── InvalidProxyUrlError
│   ├── InvalidProjectNameError
│   ├── InvalidPortError
│   └── UnknownConfigurationKeyError
├── PreconditionError
│   └── MissingProjectError
├── CommandFailedError
└── BackendNotFoundError
"""

from __future__ import annotations


class OdinError(Exception):
    """Base exception for all odin-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    show_help: bool = False
    """Whether the error boundary prints the help text after the message."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Usage -----------------------------------------------------------------

class UsageError(OdinError):
    """Raised when the command line itself is wrong.

    No collaborator is invoked; the help text is shown.
    """

    show_help = True


class UnknownCommandError(UsageError):
    """Raised for any command token that does not name a known command."""


class InvalidProxyUrlError(UsageError):
    """Raised when a ``--proxy`` value is not ``protocol://hostname:port``."""


class InvalidProjectNameError(UsageError):
    """Raised when a project name on the command line is rejected."""


class InvalidPortError(UsageError):
    """Raised when a ``--port`` value is not a digit string."""


class UnknownConfigurationKeyError(UsageError):
    """Raised when ``odin set`` receives a key outside the supported set."""


# --- Preconditions ---------------------------------------------------------

class PreconditionError(OdinError):
    """Raised when the environment does not allow the command to run."""


class MissingProjectError(PreconditionError):
    """Raised when the project marker file is absent from the working directory."""


# --- Collaborators ---------------------------------------------------------

class CommandFailedError(OdinError):
    """Raised by the dispatch wrapper after a collaborator failure was reported."""


class BackendNotFoundError(OdinError):
    """Raised when no collaborator backend is installed or the selected one is missing."""
