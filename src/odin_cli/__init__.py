"""odin-cli — scaffold, serve, build and configure Odin web applications.

Interactive (wizard) or flag-driven command front end with a strict
layered architecture.
"""

from odin_cli.version import __version__

__all__: list[str] = ["__version__"]
