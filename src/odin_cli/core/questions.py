"""Interactive question sequences.

A sequence is an ordered, acyclic graph of :class:`Question` nodes.  A
node may declare a ``when`` predicate over the answers collected so far
together with the names of the earlier questions that predicate reads
(``depends_on``).  When the predicate is false the node is skipped and
its name is absent from the result rather than defaulted.

Sequences are built fresh by the factory functions at the bottom of this
module; none keeps state between invocations.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from odin_cli.core.protocols import AnswerMap, Prompter
from odin_cli.core.validators import (
    validate_port,
    validate_project_name,
    validate_proxy_url,
)

QuestionKind = Literal["text", "select", "confirm"]


@dataclass(frozen=True, slots=True)
class Question:
    """One prompt in a sequence."""

    name: str
    kind: QuestionKind
    message: str
    default: Any = None
    choices: tuple[tuple[str, str], ...] = ()
    """``(title, value)`` pairs for ``select`` questions."""

    validate: Callable[[str], str | None] | None = None
    """Returns a rejection reason, or ``None`` to accept (``text`` only)."""

    when: Callable[[Mapping[str, Any]], bool] | None = None
    depends_on: tuple[str, ...] = ()

    def is_enabled(self, answers: Mapping[str, Any]) -> bool:
        return self.when is None or self.when(answers)

    def ask(self, prompter: Prompter) -> Any:
        """Prompt until an acceptable answer is given."""
        if self.kind == "confirm":
            return prompter.confirm(self.message, default=bool(self.default))
        if self.kind == "select":
            return prompter.select(self.message, choices=self.choices, default=self.default)

        while True:
            answer = prompter.text(
                self.message,
                default=self.default or "",
                validate=self.validate,
            )
            reason = self.validate(answer) if self.validate is not None else None
            if reason is None:
                return answer
            prompter.reject(reason)


class QuestionSequence:
    """Ordered question graph with dependency checking at construction."""

    def __init__(self, questions: list[Question]) -> None:
        seen: set[str] = set()
        for question in questions:
            if question.name in seen:
                raise ValueError(f"Duplicate question '{question.name}'")
            missing = [name for name in question.depends_on if name not in seen]
            if missing:
                raise ValueError(
                    f"Question '{question.name}' depends on {missing}, "
                    "which must be asked before it",
                )
            seen.add(question.name)
        self._questions: tuple[Question, ...] = tuple(questions)

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def run(self, prompter: Prompter) -> AnswerMap:
        """Ask every enabled question in order and collect the answers."""
        answers: AnswerMap = {}
        for question in self._questions:
            if not question.is_enabled(answers):
                continue
            answers[question.name] = question.ask(prompter)
        return answers


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------

def command_sequence() -> QuestionSequence:
    """Top-level chooser shown when ``odin`` runs without arguments."""
    return QuestionSequence([
        Question(
            name="command",
            kind="select",
            message="What do you want to do?",
            choices=(
                ("Create new project", "new"),
                ("Start development server", "serve"),
                ("Build project for production", "build"),
            ),
        ),
    ])


def new_project_sequence(cwd: Path) -> QuestionSequence:
    """Questions for ``odin new``; all six are always asked."""
    return QuestionSequence([
        Question(
            name="project_name",
            kind="text",
            message="What is the name of the project?",
            validate=lambda name: validate_project_name(name, cwd),
        ),
        Question(
            name="framework",
            kind="select",
            message="Which view framework do you want to use?",
            choices=(("Angular", "angular"), ("None", "none")),
            default="angular",
        ),
        Question(
            name="style",
            kind="select",
            message="Which style library do you want to use?",
            choices=(
                ("SoHo (Infor Design System)", "soho"),
                ("Material Design", "material"),
                ("None", "none"),
            ),
            default="soho",
        ),
        Question(
            name="proxy",
            kind="text",
            message="What is the URL of your M3 environment?",
            default="https://example.com:8080",
            validate=validate_proxy_url,
        ),
        Question(
            name="git",
            kind="confirm",
            message="Should Git be used for the project?",
            default=True,
        ),
        Question(
            name="install",
            kind="confirm",
            message="Should dependencies be installed? This can take a while.",
            default=False,
        ),
    ])


def serve_sequence() -> QuestionSequence:
    """Questions for ``odin serve``; ION API is asked only for multi-tenant."""
    return QuestionSequence([
        Question(
            name="port",
            kind="text",
            message="Which port should be used?",
            default="8080",
            validate=validate_port,
        ),
        Question(
            name="multi_tenant",
            kind="confirm",
            message="Enable Multi-Tenant proxy?",
            default=False,
        ),
        Question(
            name="ion_api",
            kind="confirm",
            message="Use ION API for Multi-Tenant proxy requests?",
            default=False,
            when=lambda answers: bool(answers.get("multi_tenant")),
            depends_on=("multi_tenant",),
        ),
    ])
