"""Core layer — validation, option resolution and question sequencing.

Rules
-----
* No ``print()`` calls.
* No imports from ``cli`` or ``infra``.
* The only I/O is the working-directory probe in the project-name
  validator, against a directory passed in by the caller.
"""

from odin_cli.core.models import (
    ConfigurationEdit,
    NewProjectAnswers,
    NewProjectOptions,
    ProxyOptions,
    ServeAnswers,
    ServeOptions,
)
from odin_cli.core.protocols import OdinBackend, Prompter
from odin_cli.core.questions import Question, QuestionSequence

__all__: list[str] = [
    "ConfigurationEdit",
    "NewProjectAnswers",
    "NewProjectOptions",
    "OdinBackend",
    "Prompter",
    "ProxyOptions",
    "Question",
    "QuestionSequence",
    "ServeAnswers",
    "ServeOptions",
]
