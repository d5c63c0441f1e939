"""Option resolvers — raw flags or wizard answers to canonical options.

Every resolver returns a fully-defaulted, frozen options object.  Input
that reaches a resolver from the wizard has already passed the question
validators; flag input is validated here with the same predicates.
"""

from __future__ import annotations

from typing import cast

from odin_cli.core.models import (
    CONFIGURATION_KEYS,
    DEFAULT_PORT,
    ConfigurationEdit,
    ConfigurationKey,
    NewProjectAnswers,
    NewProjectOptions,
    ProxyOptions,
    ServeAnswers,
    ServeOptions,
    Style,
)
from odin_cli.core.validators import is_valid_port, is_valid_proxy_url
from odin_cli.exceptions import (
    InvalidPortError,
    InvalidProxyUrlError,
    UnknownConfigurationKeyError,
)


# ---------------------------------------------------------------------------
# new
# ---------------------------------------------------------------------------

def _resolve_style(*, material: bool, soho: bool) -> Style:
    """First match wins: ``material``, then ``soho``, then ``none``."""
    if material:
        return "material"
    if soho:
        return "soho"
    return "none"


def _resolve_proxy(proxy: str | None) -> ProxyOptions | None:
    if not proxy:
        return None
    if not is_valid_proxy_url(proxy):
        raise InvalidProxyUrlError(
            f"Proxy url '{proxy}' is invalid. "
            "It should be of the format: protocol://hostname:port",
        )
    return ProxyOptions(target=proxy)


def resolve_new_project_options(
    name: str,
    *,
    proxy: str | None = None,
    material: bool = False,
    soho: bool = False,
    angular: bool = False,
    install: bool = False,
    skip_git: bool = False,
) -> NewProjectOptions:
    """Resolve ``odin new`` flags into :class:`NewProjectOptions`.

    Raises
    ------
    InvalidProxyUrlError
        When *proxy* is given but is not ``protocol://hostname:port``.
    """
    return NewProjectOptions(
        name=name,
        style=_resolve_style(material=material, soho=soho),
        angular=angular,
        proxy=_resolve_proxy(proxy),
        git=not skip_git,
        install=install,
    )


def resolve_new_project_answers(answers: NewProjectAnswers) -> NewProjectOptions:
    """Resolve wizard answers; the wizard always asks for a proxy."""
    return NewProjectOptions(
        name=answers.project_name,
        style=answers.style,
        angular=answers.framework == "angular",
        proxy=ProxyOptions(target=answers.proxy),
        git=answers.git,
        install=answers.install,
    )


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------

def resolve_serve_options(
    *,
    port: str | int | None = None,
    multi_tenant: bool = False,
    ion_api: bool = False,
) -> ServeOptions:
    """Resolve ``odin serve`` flags into :class:`ServeOptions`.

    ``ion_api`` is taken as given even without ``multi_tenant``.
    """
    if port is None:
        resolved_port = DEFAULT_PORT
    elif isinstance(port, int):
        resolved_port = port
    elif is_valid_port(port):
        resolved_port = int(port, 10)
    else:
        raise InvalidPortError(f"Port '{port}' is invalid. It must be a number, e.g 8080")
    return ServeOptions(
        port=resolved_port,
        multi_tenant=bool(multi_tenant),
        ion_api=bool(ion_api),
    )


def resolve_serve_answers(answers: ServeAnswers) -> ServeOptions:
    """Resolve wizard answers; a skipped ION API question means ``False``."""
    return ServeOptions(
        port=int(answers.port, 10),
        multi_tenant=answers.multi_tenant,
        ion_api=bool(answers.ion_api),
    )


# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------

def resolve_configuration_edit(key: str, value: str) -> ConfigurationEdit:
    """Pass ``(key, value)`` through after checking key membership."""
    if key not in CONFIGURATION_KEYS:
        raise UnknownConfigurationKeyError(
            f"Unknown configuration key '{key}'.",
            hint=f"Valid configuration keys are: {', '.join(CONFIGURATION_KEYS)}",
        )
    return ConfigurationEdit(key=cast(ConfigurationKey, key), value=value)
