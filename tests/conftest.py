"""Shared pytest fixtures and configuration for the odin-cli test suite.

Guidelines
----------
* No terminal interaction: wizard tests use :class:`ScriptedPrompter`.
* No real collaborators: dispatch goes to :class:`RecordingBackend`.
* The working directory is always ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest


class ScriptedPrompter:
    """Prompter replaying canned answers in order.

    Every prompt records its message in :attr:`asked`; rejection reasons
    land in :attr:`rejections`.  Running out of answers simulates Ctrl+C.
    """

    def __init__(self, answers: Sequence[Any]) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []
        self.rejections: list[str] = []

    def _next(self, message: str) -> Any:
        self.asked.append(message)
        if not self._answers:
            raise KeyboardInterrupt
        return self._answers.pop(0)

    def text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Callable[[str], str | None] | None = None,
    ) -> str:
        return self._next(message)

    def select(
        self,
        message: str,
        *,
        choices: Sequence[tuple[str, str]],
        default: str | None = None,
    ) -> str:
        answer = self._next(message)
        assert answer in [value for _title, value in choices]
        return answer

    def confirm(self, message: str, *, default: bool = False) -> bool:
        return self._next(message)

    def reject(self, reason: str) -> None:
        self.rejections.append(reason)


class RecordingBackend:
    """Backend recording every collaborator call; optionally failing."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._error = error

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self._error is not None:
            raise self._error

    def new_project(self, options: Any) -> None:
        self._record("new_project", options)

    def serve_project(self, options: Any) -> None:
        self._record("serve_project", options)

    def build_project(self) -> None:
        self._record("build_project")

    def set_configuration(self, key: str, value: str) -> None:
        self._record("set_configuration", key, value)

    def login(self) -> None:
        self._record("login")


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A working directory containing the project marker file."""
    (tmp_path / "odin.json").write_text("{}", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_prompter() -> Callable[[Sequence[Any]], ScriptedPrompter]:
    return ScriptedPrompter


@pytest.fixture
def failing_backend() -> RecordingBackend:
    return RecordingBackend(error=RuntimeError("boom"))
