"""CLI application entry point and command routing for odin.

This module is the **sole error boundary** for the entire application.
:func:`main` turns :class:`~odin_cli.exceptions.OdinError` into exit
code 1 (with help text for usage errors only); :func:`cli` additionally
catches ``KeyboardInterrupt`` and any unexpected ``Exception``.

Architecture notes
------------------
* No business logic lives here. Validation and defaulting belong to
  ``core.resolvers``, outcome reporting to ``cli.dispatch``.
* Ambient state (working directory, prompter, backend) is injectable so
  routing is testable without a terminal or a real project generator.
* Zero arguments selects wizard mode; anything else is direct mode.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from rich.markup import escape

from odin_cli.cli import exit_codes
from odin_cli.cli.console import console, err_console
from odin_cli.cli.dispatch import Dispatcher
from odin_cli.core.models import CONFIGURATION_KEYS, NewProjectAnswers, ServeAnswers
from odin_cli.core.protocols import BackendFactory, OdinBackend, Prompter
from odin_cli.core.questions import command_sequence, new_project_sequence, serve_sequence
from odin_cli.core.resolvers import (
    resolve_configuration_edit,
    resolve_new_project_answers,
    resolve_new_project_options,
    resolve_serve_answers,
    resolve_serve_options,
)
from odin_cli.core.validators import validate_project_name
from odin_cli.exceptions import (
    InvalidProjectNameError,
    OdinError,
    UnknownCommandError,
    UsageError,
)
from odin_cli.version import __version__

COMMANDS: tuple[str, ...] = ("new", "serve", "build", "set", "login")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _OdinArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises :class:`UsageError` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with one sub-parser per command."""
    parser = _OdinArgumentParser(
        prog="odin",
        description="Tool to set up and manage a web application with Odin.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    new = commands.add_parser("new", help="Create a new project")
    new.add_argument("project_name", nargs="?", default=None, metavar="name")
    new.add_argument(
        "--proxy",
        metavar="url",
        help='URL to MI REST Service, e.g "https://my.m3.environment.com:54008"',
    )
    new.add_argument("-m", "--material", action="store_true", help="Set up as a Material-styled project")
    new.add_argument("-s", "--soho", action="store_true", help="Set up as a Soho-styled project")
    new.add_argument("-a", "--angular", action="store_true", help="Set up as an Angular CLI project")
    new.add_argument("-i", "--install", action="store_true", help="Install NPM dependencies")
    new.add_argument("--skip-git", action="store_true", help="Skip initialization of a git repository")

    serve = commands.add_parser("serve", help="Start web server and builder")
    serve.add_argument("-p", "--port", metavar="port", help="Port to listen on")
    serve.add_argument("-m", "--multi-tenant", action="store_true", help="Enable Multi-Tenant proxy")
    serve.add_argument(
        "-i", "--ion-api", action="store_true", help="Use ION API for Multi-Tenant proxy requests"
    )

    commands.add_parser("build", help="Build a production-ready application")

    set_cmd = commands.add_parser(
        "set",
        help=(
            "Configure an existing project. "
            f"Valid configuration keys are: {', '.join(CONFIGURATION_KEYS)}"
        ),
    )
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")

    commands.add_parser("login", help="Log in to the configured environment")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

@dataclass
class _Context:
    cwd: Path
    dispatcher: Dispatcher
    prompter: Prompter | None

    def get_prompter(self) -> Prompter:
        if self.prompter is None:
            from odin_cli.cli.prompt import QuestionaryPrompter

            self.prompter = QuestionaryPrompter()
        return self.prompter


def _inquire_new_project(ctx: _Context) -> None:
    answers = new_project_sequence(ctx.cwd).run(ctx.get_prompter())
    options = resolve_new_project_answers(NewProjectAnswers.from_answers(answers))
    ctx.dispatcher.new_project(options)


def _inquire_serve_project(ctx: _Context) -> None:
    answers = serve_sequence().run(ctx.get_prompter())
    options = resolve_serve_answers(ServeAnswers.from_answers(answers))
    ctx.dispatcher.serve_project(options)


def _inquire_command(ctx: _Context) -> None:
    """Wizard mode: choose a command, then run its question sequence."""
    command = command_sequence().run(ctx.get_prompter())["command"]
    if command == "new":
        _inquire_new_project(ctx)
    elif command == "serve":
        _inquire_serve_project(ctx)
    elif command == "build":
        ctx.dispatcher.build_project()


def _handle_new(args: argparse.Namespace, ctx: _Context) -> None:
    if not args.project_name:
        _inquire_new_project(ctx)
        return
    reason = validate_project_name(args.project_name, ctx.cwd)
    if reason is not None:
        raise InvalidProjectNameError(f"Project name '{args.project_name}' is invalid. {reason}")
    options = resolve_new_project_options(
        args.project_name,
        proxy=args.proxy,
        material=args.material,
        soho=args.soho,
        angular=args.angular,
        install=args.install,
        skip_git=args.skip_git,
    )
    ctx.dispatcher.new_project(options)


def _handle_serve(args: argparse.Namespace, ctx: _Context) -> None:
    options = resolve_serve_options(
        port=args.port,
        multi_tenant=args.multi_tenant,
        ion_api=args.ion_api,
    )
    ctx.dispatcher.serve_project(options)


def _handle_set(args: argparse.Namespace, ctx: _Context) -> None:
    ctx.dispatcher.set_configuration(resolve_configuration_edit(args.key, args.value))


def _route(argv: list[str], ctx: _Context, parser: argparse.ArgumentParser) -> None:
    if not argv:
        _inquire_command(ctx)
        return

    first = argv[0]
    if not first.startswith("-") and first not in COMMANDS:
        raise UnknownCommandError(f"Unknown command '{first}'")

    args = parser.parse_args(argv)
    if args.command == "new":
        _handle_new(args, ctx)
    elif args.command == "serve":
        _handle_serve(args, ctx)
    elif args.command == "build":
        ctx.dispatcher.build_project()
    elif args.command == "set":
        _handle_set(args, ctx)
    elif args.command == "login":
        ctx.dispatcher.login()
    else:
        raise UsageError("No command given")


def _report(exc: OdinError, parser: argparse.ArgumentParser) -> int:
    err_console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}", highlight=False)
    if exc.hint:
        err_console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}", highlight=False)
    if exc.show_help:
        console.print_plain(parser.format_help())
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    cwd: Path | None = None,
    prompter: Prompter | None = None,
    backend: OdinBackend | None = None,
) -> int:
    """Run the odin CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    cwd:
        Working directory for project-name and marker-file checks.
        Defaults to :meth:`Path.cwd`.
    prompter:
        Wizard I/O.  Defaults to a questionary-backed prompter.
    backend:
        Collaborator backend.  Defaults to the installed
        ``odin_cli.backends`` entry point, loaded on first dispatch.

    Returns
    -------
    int
        OS process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]
    if cwd is None:
        cwd = Path.cwd()

    if backend is None:
        from odin_cli.infra.backend_loader import load_backend

        backend_factory: BackendFactory = load_backend
    else:
        instance = backend
        backend_factory = lambda: instance  # noqa: E731

    parser = _build_parser()
    ctx = _Context(cwd=cwd, dispatcher=Dispatcher(backend_factory, cwd), prompter=prompter)
    try:
        _route(list(argv), ctx, parser)
    except OdinError as exc:
        return _report(exc, parser)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
