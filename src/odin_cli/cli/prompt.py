"""Terminal prompter backed by questionary.

Implements :class:`~odin_cli.core.protocols.Prompter` for the wizard.
Validation runs inline, so questionary re-asks with the rejection reason
without leaving the prompt.  A cancelled prompt (Ctrl+C / Esc makes
``ask()`` return ``None``) is turned into :class:`KeyboardInterrupt`
so the whole invocation aborts and nothing is dispatched.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import questionary

from odin_cli.cli.console import err_console


def _answered(answer: Any) -> Any:
    if answer is None:
        raise KeyboardInterrupt
    return answer


def _inline(validate: Callable[[str], str | None] | None) -> Callable[[str], bool | str]:
    """Adapt a reason-or-``None`` validator to questionary's ``True``-or-reason."""
    def _check(value: str) -> bool | str:
        if validate is None:
            return True
        reason = validate(value)
        return True if reason is None else reason

    return _check


class QuestionaryPrompter:
    """Interactive prompts rendered by questionary."""

    def text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Callable[[str], str | None] | None = None,
    ) -> str:
        return _answered(
            questionary.text(message, default=default, validate=_inline(validate)).ask()
        )

    def select(
        self,
        message: str,
        *,
        choices: Sequence[tuple[str, str]],
        default: str | None = None,
    ) -> str:
        return _answered(
            questionary.select(
                message,
                choices=[questionary.Choice(title=title, value=value) for title, value in choices],
                default=default,
                use_arrow_keys=True,
                use_shortcuts=False,
            ).ask()
        )

    def confirm(self, message: str, *, default: bool = False) -> bool:
        return bool(_answered(questionary.confirm(message, default=default).ask()))

    def reject(self, reason: str) -> None:
        err_console.print(f"[yellow]{reason}[/yellow]")
