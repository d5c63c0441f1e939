"""Tests for command routing (cli/app.py).

Every invocation injects the working directory, a scripted prompter and
a recording backend, so no terminal, filesystem outside ``tmp_path`` or
real collaborator is touched.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from odin_cli.cli import exit_codes
from odin_cli.cli.app import main
from odin_cli.core.models import NewProjectOptions, ProxyOptions, ServeOptions

PrompterFactory = Callable[..., Any]


# ---------------------------------------------------------------------------
# Usage errors
# ---------------------------------------------------------------------------

class TestUnknownCommand:
    @pytest.mark.parametrize("token", ["frobnicate", "NEW", "serve2", "help"])
    def test_exit_one_with_help(
        self,
        token: str,
        tmp_path: Path,
        backend: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main([token], cwd=tmp_path, backend=backend)

        captured = capsys.readouterr()
        assert code == exit_codes.GENERAL_ERROR
        assert f"Unknown command '{token}'" in captured.err
        assert "usage: odin" in captured.out
        assert backend.calls == []

    def test_unknown_option_is_usage_error(
        self, tmp_path: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["serve", "--frob"], cwd=tmp_path, backend=backend)

        assert code == exit_codes.GENERAL_ERROR
        assert "usage: odin" in capsys.readouterr().out


class TestVersionAndHelp:
    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_help_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "login" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# new
# ---------------------------------------------------------------------------

class TestNewCommand:
    def test_defaults(self, tmp_path: Path, backend: Any) -> None:
        code = main(["new", "my-app"], cwd=tmp_path, backend=backend)

        assert code == exit_codes.SUCCESS
        assert backend.calls == [
            ("new_project", (NewProjectOptions(name="my-app", style="none", git=True),)),
        ]
        options = backend.calls[0][1][0]
        assert "proxy" not in options.as_dict()

    def test_all_flags(self, tmp_path: Path, backend: Any) -> None:
        main(
            [
                "new", "my-app",
                "--proxy", "https://m3.example.com:54008",
                "-m", "-s", "-a", "-i", "--skip-git",
            ],
            cwd=tmp_path,
            backend=backend,
        )

        (options,) = backend.calls[0][1]
        assert options == NewProjectOptions(
            name="my-app",
            style="material",
            angular=True,
            proxy=ProxyOptions(target="https://m3.example.com:54008"),
            git=False,
            install=True,
        )

    def test_soho(self, tmp_path: Path, backend: Any) -> None:
        main(["new", "my-app", "--soho"], cwd=tmp_path, backend=backend)
        assert backend.calls[0][1][0].style == "soho"

    def test_success_banner(
        self, tmp_path: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["new", "my-app"], cwd=tmp_path, backend=backend)

        out = capsys.readouterr().out
        assert "Done!" in out
        assert "cd my-app" in out
        assert "odin serve" in out

    def test_invalid_proxy(
        self, tmp_path: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["new", "my-app", "--proxy", "m3.example.com"], cwd=tmp_path, backend=backend)

        captured = capsys.readouterr()
        assert code == exit_codes.GENERAL_ERROR
        assert "Proxy url 'm3.example.com' is invalid" in captured.err
        assert "usage: odin" in captured.out
        assert backend.calls == []

    def test_existing_directory(self, tmp_path: Path, backend: Any) -> None:
        (tmp_path / "my-app").mkdir()

        code = main(["new", "my-app"], cwd=tmp_path, backend=backend)

        assert code == exit_codes.GENERAL_ERROR
        assert backend.calls == []

    def test_without_name_runs_wizard(
        self, tmp_path: Path, backend: Any, make_prompter: PrompterFactory,
    ) -> None:
        prompter = make_prompter(["my-app", "none", "soho", "https://example.com:8080", True, False])

        code = main(["new"], cwd=tmp_path, prompter=prompter, backend=backend)

        assert code == exit_codes.SUCCESS
        (options,) = backend.calls[0][1]
        assert options.name == "my-app"
        assert options.angular is False


# ---------------------------------------------------------------------------
# serve / build (marker file)
# ---------------------------------------------------------------------------

class TestServeCommand:
    def test_defaults(self, project_dir: Path, backend: Any) -> None:
        code = main(["serve"], cwd=project_dir, backend=backend)

        assert code == exit_codes.SUCCESS
        assert backend.calls == [("serve_project", (ServeOptions(8080, False, False),))]
        assert backend.calls[0][1][0].as_dict() == {
            "port": 8080, "multiTenant": False, "ionApi": False,
        }

    def test_flags(self, project_dir: Path, backend: Any) -> None:
        main(["serve", "-p", "3000", "-m", "-i"], cwd=project_dir, backend=backend)
        assert backend.calls[0][1][0] == ServeOptions(port=3000, multi_tenant=True, ion_api=True)

    def test_ion_api_alone_is_accepted(self, project_dir: Path, backend: Any) -> None:
        main(["serve", "--ion-api"], cwd=project_dir, backend=backend)
        assert backend.calls[0][1][0] == ServeOptions(port=8080, multi_tenant=False, ion_api=True)

    def test_invalid_port(self, project_dir: Path, backend: Any) -> None:
        code = main(["serve", "--port", "http"], cwd=project_dir, backend=backend)
        assert code == exit_codes.GENERAL_ERROR
        assert backend.calls == []

    def test_missing_marker(
        self, tmp_path: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["serve"], cwd=tmp_path, backend=backend)

        captured = capsys.readouterr()
        assert code == exit_codes.GENERAL_ERROR
        assert "Could not find an Odin configuration file." in captured.err
        assert "usage:" not in captured.out
        assert backend.calls == []


class TestBuildCommand:
    def test_builds(
        self, project_dir: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["build"], cwd=project_dir, backend=backend)

        assert code == exit_codes.SUCCESS
        assert backend.calls == [("build_project", ())]
        assert "Project built successfully" in capsys.readouterr().out

    def test_missing_marker(
        self, tmp_path: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["build"], cwd=tmp_path, backend=backend)

        captured = capsys.readouterr()
        assert code == exit_codes.GENERAL_ERROR
        assert "usage:" not in captured.out
        assert backend.calls == []

    def test_missing_marker_never_loads_backend(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _explode() -> Any:
            raise AssertionError("backend must not be loaded")

        monkeypatch.setattr("odin_cli.infra.backend_loader.load_backend", _explode)
        code = main(["build"], cwd=tmp_path)
        assert code == exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# set / login
# ---------------------------------------------------------------------------

class TestSetCommand:
    def test_sets_value(self, tmp_path: Path, backend: Any) -> None:
        code = main(["set", "m3-proxy", "https://m3.example.com:443"], cwd=tmp_path, backend=backend)

        assert code == exit_codes.SUCCESS
        assert backend.calls == [("set_configuration", ("m3-proxy", "https://m3.example.com:443"))]

    def test_unknown_key(
        self, tmp_path: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["set", "colour", "blue"], cwd=tmp_path, backend=backend)

        assert code == exit_codes.GENERAL_ERROR
        assert "usage: odin" in capsys.readouterr().out
        assert backend.calls == []

    def test_missing_value(self, tmp_path: Path, backend: Any) -> None:
        assert main(["set", "name"], cwd=tmp_path, backend=backend) == exit_codes.GENERAL_ERROR


class TestLoginCommand:
    def test_prints_hint(
        self, tmp_path: Path, backend: Any, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["login"], cwd=tmp_path, backend=backend)

        assert code == exit_codes.SUCCESS
        assert backend.calls == [("login", ())]
        assert "odin serve --multi-tenant" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Wizard mode
# ---------------------------------------------------------------------------

class TestWizard:
    def test_new(self, tmp_path: Path, backend: Any, make_prompter: PrompterFactory) -> None:
        prompter = make_prompter(
            ["new", "my-app", "angular", "material", "https://m3.example.com:54008", True, True]
        )

        code = main([], cwd=tmp_path, prompter=prompter, backend=backend)

        assert code == exit_codes.SUCCESS
        assert backend.calls == [(
            "new_project",
            (NewProjectOptions(
                name="my-app",
                style="material",
                angular=True,
                proxy=ProxyOptions(target="https://m3.example.com:54008"),
                git=True,
                install=True,
            ),),
        )]

    def test_serve_single_tenant(
        self, project_dir: Path, backend: Any, make_prompter: PrompterFactory,
    ) -> None:
        prompter = make_prompter(["serve", "9000", False])

        main([], cwd=project_dir, prompter=prompter, backend=backend)

        assert len(prompter.asked) == 3
        assert backend.calls == [("serve_project", (ServeOptions(9000, False, False),))]

    def test_serve_multi_tenant(
        self, project_dir: Path, backend: Any, make_prompter: PrompterFactory,
    ) -> None:
        prompter = make_prompter(["serve", "8080", True, True])

        main([], cwd=project_dir, prompter=prompter, backend=backend)

        assert backend.calls == [("serve_project", (ServeOptions(8080, True, True),))]

    def test_serve_requires_marker(
        self, tmp_path: Path, backend: Any, make_prompter: PrompterFactory,
    ) -> None:
        prompter = make_prompter(["serve", "8080", False])

        code = main([], cwd=tmp_path, prompter=prompter, backend=backend)

        assert code == exit_codes.GENERAL_ERROR
        assert backend.calls == []

    def test_build(self, project_dir: Path, backend: Any, make_prompter: PrompterFactory) -> None:
        prompter = make_prompter(["build"])

        code = main([], cwd=project_dir, prompter=prompter, backend=backend)

        assert code == exit_codes.SUCCESS
        assert backend.calls == [("build_project", ())]

    def test_interrupt_dispatches_nothing(
        self, tmp_path: Path, backend: Any, make_prompter: PrompterFactory,
    ) -> None:
        prompter = make_prompter(["new", "my-app"])

        with pytest.raises(KeyboardInterrupt):
            main([], cwd=tmp_path, prompter=prompter, backend=backend)
        assert backend.calls == []
