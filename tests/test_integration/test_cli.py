"""Integration tests for the apidocgen command line.

The HTTP layer is stubbed at ``httpx.get`` so the full command runs: option
parsing, precedence resolution, fetch, generation, relocation, and cleanup.
"""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from apidocgen import __version__
from apidocgen.app import app
from apidocgen.config import raw_document_path, run_config_path

URL = "http://localhost:5033/swagger/v1/swagger.json"


def _ok(document: dict[str, Any]) -> httpx.Response:
    return httpx.Response(200, json=document, request=httpx.Request("GET", URL))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestGenerateCommand:

    def test_generates_into_output_directory(
        self, runner: CliRunner, isolated_config: Path, swagger_raw: dict[str, Any]
    ) -> None:
        dest = isolated_config / "web"
        with patch("apidocgen.parser.loader.httpx.get", return_value=_ok(swagger_raw)):
            result = runner.invoke(
                app,
                ["-s", URL, "--bp", "/api/", "-o", str(dest), "--no-format", "--no-open"],
            )
        assert result.exit_code == 0, result.output
        users = dest / "api_docs" / "Users" / "Users.ts"
        assert users.is_file()
        assert "export const Users_id = (id: any) => `Users/${id}`;" in users.read_text()
        assert "Cleaned" in result.output
        assert not run_config_path().exists()
        assert not raw_document_path().exists()

    def test_skip_folder_flattens(
        self, runner: CliRunner, isolated_config: Path, swagger_raw: dict[str, Any]
    ) -> None:
        dest = isolated_config / "web"
        with patch("apidocgen.parser.loader.httpx.get", return_value=_ok(swagger_raw)):
            result = runner.invoke(
                app,
                [
                    "--swagger", URL,
                    "--bp", "/api/",
                    "--output", str(dest),
                    "--skip-folder",
                    "--no-format",
                    "--no-open",
                ],
            )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in (dest / "api_docs").iterdir()) == [
            "Products.ts",
            "Users.ts",
            "health.ts",
        ]

    def test_default_location_printed(
        self, runner: CliRunner, isolated_config: Path, swagger_raw: dict[str, Any]
    ) -> None:
        with patch("apidocgen.parser.loader.httpx.get", return_value=_ok(swagger_raw)):
            result = runner.invoke(app, ["-s", URL, "--bp", "/api/", "--no-format", "--no-open"])
        assert result.exit_code == 0, result.output
        assert (isolated_config / "data" / "apidocgen" / "api_docs" / "Users").is_dir()
        assert "Output:" in result.output

    def test_connection_refused_exit_code(
        self, runner: CliRunner, isolated_config: Path
    ) -> None:
        with patch(
            "apidocgen.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("[Errno 111] Connection refused"),
        ):
            result = runner.invoke(app, ["-s", URL, "--bp", "/api/", "--no-format", "--no-open"])
        assert result.exit_code == 6
        assert "Could not connect" in result.output
        assert "Cleaned" in result.output
        assert not run_config_path().exists()

    def test_invalid_json_exit_code(self, runner: CliRunner, isolated_config: Path) -> None:
        response = httpx.Response(200, text="<html/>", request=httpx.Request("GET", URL))
        with patch("apidocgen.parser.loader.httpx.get", return_value=response):
            result = runner.invoke(app, ["-s", URL, "--bp", "/api/", "--no-format", "--no-open"])
        assert result.exit_code == 7
        assert not raw_document_path().exists()

    def test_unknown_flag_rejected(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["-s", URL, "--bp", "/api/", "--frobnicate"])
        assert result.exit_code == 2

    def test_missing_values_without_terminal(
        self, runner: CliRunner, isolated_config: Path
    ) -> None:
        result = runner.invoke(app, ["--bp", "/api/"])
        assert result.exit_code == 2
        assert "Missing" in result.output

    def test_prompts_for_missing_values(
        self,
        runner: CliRunner,
        isolated_config: Path,
        swagger_raw: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr("apidocgen.app._can_prompt", lambda: True)
        with patch(
            "apidocgen.parser.loader.httpx.get", return_value=_ok(swagger_raw)
        ) as get:
            result = runner.invoke(
                app,
                ["--no-format", "--no-open"],
                input=f"\n{URL}\n  \n/api/\n",
            )
        assert result.exit_code == 0, result.output
        assert get.call_args.args[0] == URL

    def test_project_config_supplies_values(
        self, runner: CliRunner, isolated_config: Path, swagger_raw: dict[str, Any]
    ) -> None:
        (isolated_config / "apidocgen.json").write_text(
            json.dumps({"swagger": URL, "base_path": "/api/", "lowercase": True})
        )
        dest = isolated_config / "out"
        with patch("apidocgen.parser.loader.httpx.get", return_value=_ok(swagger_raw)):
            result = runner.invoke(app, ["-o", str(dest), "--no-format", "--no-open"])
        assert result.exit_code == 0, result.output
        assert (dest / "api_docs" / "users" / "users.ts").is_file()

    def test_local_file_source(
        self, runner: CliRunner, isolated_config: Path, swagger_file: Path
    ) -> None:
        dest = isolated_config / "out"
        result = runner.invoke(
            app,
            ["-s", str(swagger_file), "--bp", "/api/", "-o", str(dest), "--no-format", "--no-open"],
        )
        assert result.exit_code == 0, result.output
        assert (dest / "api_docs" / "Products" / "Products.ts").is_file()

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


def test_importing_main_module_does_not_run(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delitem(sys.modules, "apidocgen.__main__", raising=False)
    with patch("apidocgen.app.main") as main:
        importlib.import_module("apidocgen.__main__")
    main.assert_not_called()
