"""CLI console helpers built on Rich.

Rich consoles are created lazily on every call so output always targets
the *current* ``sys.stdout`` / ``sys.stderr`` (pytest's ``capsys``
swaps them per test).  Normal progress goes to stdout, errors to stderr.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console


def get_rich_console(*, stderr: bool = False) -> Console:
    """Create a Rich console targeting stdout, or stderr when asked."""
    return Console(stderr=stderr)


class _ConsoleProxy:
    """``print``-compatible proxy around a lazily created Rich console."""

    def __init__(self, *, stderr: bool = False) -> None:
        self._stderr = stderr

    def print(self, *objects: object, **kwargs: Any) -> None:
        """Render with Rich markup; long lines are never re-wrapped."""
        kwargs.setdefault("soft_wrap", True)
        get_rich_console(stderr=self._stderr).print(*objects, **kwargs)

    def print_plain(self, text: str) -> None:
        """Print *text* verbatim (no markup, no highlighting)."""
        self.print(text, markup=False, highlight=False, end="")


console = _ConsoleProxy()
err_console = _ConsoleProxy(stderr=True)
