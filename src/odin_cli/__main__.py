"""Allow ``python -m odin_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m odin_cli`` behaves identically to the ``odin``
console script.
"""

from __future__ import annotations

from odin_cli.cli.app import cli

if __name__ == "__main__":
    cli()
