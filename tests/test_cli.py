"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docly.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_flags_around_path() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "src", "--resolve-mounts"])
    assert args.verbose is True
    assert args.path == "src"
    assert args.resolve_mounts is True


def test_resolve_mounts_defaults_to_config() -> None:
    args = _build_parser().parse_args(["src"])
    assert args.resolve_mounts is None


def test_missing_path_exits_with_status_one(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "Usage" in capsys.readouterr().err


def test_unknown_folder_exits_with_status_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing")])
    assert excinfo.value.code == 1
    assert "Folder not found" in capsys.readouterr().err


def test_invalid_config_exits_with_status_one(
    project_builder: ProjectBuilder, tmp_path: Path
) -> None:
    config = tmp_path / "bad.yml"
    config.write_text("- not a mapping\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main([str(project_builder.path()), "--config", str(config)])
    assert excinfo.value.code == 1


def test_run_writes_outputs_to_working_directory(
    project_builder: ProjectBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    project_builder.write(
        {
            "server.ts": """
                const app = express();
                app.get("/health", handler);
            """,
        }
    )
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    main([str(project_builder.path())])

    payload = json.loads((workdir / "output.json").read_text(encoding="utf-8"))
    assert payload["routes"][0]["path"] == "/health"
    assert (workdir / "apidoc.html").exists()
    assert "Documented 1 route(s)" in capsys.readouterr().out


def test_log_file_receives_debug_records(
    project_builder: ProjectBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    project_builder.write({"server.ts": "const app = express();\n"})
    monkeypatch.chdir(tmp_path)
    log_file = tmp_path / "logs" / "docly.log"

    main([str(project_builder.path()), "--log-file", str(log_file)])

    text = log_file.read_text(encoding="utf-8")
    assert "docly.orchestrator: Starting extraction" in text
    assert "DEBUG docly.orchestrator: Extracting" in text
