"""Domain models for odin-cli.

All models are **frozen** dataclasses: immutable value objects built
once per invocation, handed to a collaborator and discarded.  They
carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

Style = Literal["none", "material", "soho"]
Framework = Literal["angular", "none"]
ConfigurationKey = Literal["name", "m3-proxy", "ion-proxy"]

CONFIGURATION_KEYS: tuple[str, ...] = ("name", "m3-proxy", "ion-proxy")
DEFAULT_PORT: int = 8080


# ---------------------------------------------------------------------------
# Resolved options (handed to collaborators)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProxyOptions:
    """Reverse-proxy settings for a new project."""

    target: str
    """Proxy target of the form ``protocol://hostname:port``."""


@dataclass(frozen=True, slots=True)
class NewProjectOptions:
    """Everything the project generator needs to scaffold a project."""

    name: str
    """Directory and package name; letters, digits and dashes only."""

    style: Style = "none"
    """Exactly one style library.  Never unset."""

    angular: bool = False
    """Set up as an Angular CLI project."""

    proxy: ProxyOptions | None = None
    """``None`` means no proxy was requested."""

    git: bool = True
    """Initialise a git repository."""

    install: bool = False
    """Install npm dependencies after scaffolding."""

    def as_dict(self) -> dict[str, Any]:
        """Plain mapping view; ``proxy`` is omitted entirely when absent."""
        data: dict[str, Any] = {
            "name": self.name,
            "style": self.style,
            "angular": self.angular,
            "git": self.git,
            "install": self.install,
        }
        if self.proxy is not None:
            data["proxy"] = {"target": self.proxy.target}
        return data


@dataclass(frozen=True, slots=True)
class ServeOptions:
    """Dev server settings.

    ``ion_api`` is only meaningful together with ``multi_tenant``; direct
    mode does not enforce that.
    """

    port: int = DEFAULT_PORT
    multi_tenant: bool = False
    ion_api: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "port": self.port,
            "multiTenant": self.multi_tenant,
            "ionApi": self.ion_api,
        }


@dataclass(frozen=True, slots=True)
class ConfigurationEdit:
    """A single key/value change to an existing project's configuration."""

    key: ConfigurationKey
    value: str


# ---------------------------------------------------------------------------
# Typed wizard answers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NewProjectAnswers:
    """Answers collected by the ``new`` question sequence."""

    project_name: str
    framework: Framework
    style: Style
    proxy: str
    git: bool
    install: bool

    @classmethod
    def from_answers(cls, answers: dict[str, Any]) -> NewProjectAnswers:
        return cls(
            project_name=answers["project_name"],
            framework=answers["framework"],
            style=answers["style"],
            proxy=answers["proxy"],
            git=bool(answers["git"]),
            install=bool(answers["install"]),
        )


@dataclass(frozen=True, slots=True)
class ServeAnswers:
    """Answers collected by the ``serve`` question sequence."""

    port: str
    multi_tenant: bool
    ion_api: bool | None
    """``None`` when the ION API question was skipped."""

    @classmethod
    def from_answers(cls, answers: dict[str, Any]) -> ServeAnswers:
        ion_api = answers.get("ion_api")
        return cls(
            port=answers["port"],
            multi_tenant=bool(answers["multi_tenant"]),
            ion_api=None if ion_api is None else bool(ion_api),
        )
