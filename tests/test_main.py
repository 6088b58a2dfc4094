"""Тесты точки входа командной строки."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pytest

from docker_provider import main as main_module
from docker_provider.driver import executor as executor_module
from docker_provider.driver.exceptions import DockerExecuteError
from docker_provider.main import initialize_workdir, main, setup_logging_from_settings
from docker_provider.settings.groups import LoggingSettings
from docker_provider.settings.registry import SettingsRegistry


class DummySettings:
    def __init__(self, enabled: bool = True, level: str = "INFO") -> None:
        self.logging = LoggingSettings()
        self.logging.set("enabled", enabled)
        self.logging.set("level", level)

    def get_group(self, name: str):  # type: ignore[override]
        if name == "logging":
            return self.logging
        raise KeyError(name)


class ScriptedExecute:
    """Подменяет CommandExecutor.execute (как атрибут класса, без привязки к self)."""

    def __init__(self, responses: Optional[Dict[str, str]] = None) -> None:
        self.responses = responses or {}
        self.commands: List[Tuple[str, ...]] = []

    def __call__(self, *command: str, on_output: Any = None) -> str:
        self.commands.append(command)
        return self.responses.get(command[1], "")


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    monkeypatch.setenv("DOCKER_PROVIDER_HOME", str(tmp_path))
    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    logging.disable(logging.NOTSET)
    yield tmp_path
    SettingsRegistry._instance = None  # type: ignore[attr-defined]


def install_execute(monkeypatch: pytest.MonkeyPatch, fake: ScriptedExecute) -> None:
    monkeypatch.setattr(executor_module.CommandExecutor, "execute", fake)


def test_initialize_workdir_creates_structure(tmp_path: Path) -> None:
    assert initialize_workdir(tmp_path)
    assert (tmp_path / "logs").is_dir()


def test_setup_logging_enabled_creates_log(tmp_path: Path) -> None:
    logging.disable(logging.NOTSET)
    setup_logging_from_settings(tmp_path, DummySettings(enabled=True))
    logging.getLogger("test").info("log entry")
    for handler in logging.getLogger().handlers:
        handler.flush()
    log_file = tmp_path / "logs" / "driver.log"
    assert "log entry" in log_file.read_text(encoding="utf-8")


def test_setup_logging_disabled(tmp_path: Path) -> None:
    logging.disable(logging.NOTSET)
    setup_logging_from_settings(tmp_path, DummySettings(enabled=False))
    assert logging.root.manager.disable >= logging.CRITICAL
    logging.disable(logging.NOTSET)


def test_main_ps_prints_containers(
    workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    fake = ScriptedExecute({"ps": "container1\ncontainer2\n"})
    install_execute(monkeypatch, fake)

    assert main(["ps"]) == 0

    assert capsys.readouterr().out.splitlines() == ["container1", "container2"]
    assert fake.commands == [("docker", "ps", "-a", "-q", "--no-trunc")]
    assert (workdir / "config.json").exists()


def test_main_state(
    workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    install_execute(monkeypatch, ScriptedExecute({"ps": "abc\n"}))

    assert main(["state", "abc"]) == 0
    assert capsys.readouterr().out.strip() == "running"


def test_main_stop_uses_configured_timeout(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (workdir / "config.json").write_text(
        json.dumps({"driver": {"stop_timeout_sec": 7}}), encoding="utf-8"
    )
    fake = ScriptedExecute({"ps": "abc\n"})
    install_execute(monkeypatch, fake)

    assert main(["stop", "abc"]) == 0
    assert fake.commands[-1] == ("docker", "stop", "-t", "7", "abc")


def test_main_run_builds_create_command(
    workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    fake = ScriptedExecute({"run": "deadbeef\n"})
    install_execute(monkeypatch, fake)

    exit_code = main(
        [
            "run",
            "--name",
            "web",
            "-p",
            "8080:80",
            "--link",
            "db:database",
            "-e",
            "MODE=dev",
            "nginx",
            "nginx",
            "-g",
            "daemon off;",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "deadbeef"
    assert fake.commands[-1] == (
        "docker",
        "run",
        "--name",
        "web",
        "-d",
        "-p",
        "8080:80",
        "--link",
        "db:database",
        "-e",
        "MODE=dev",
        "nginx",
        "nginx",
        "-g",
        "daemon off;",
    )


def test_main_reports_driver_errors(
    workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def failing(executor: Any, *command: str, on_output: Any = None) -> str:
        raise DockerExecuteError(command, 1, "", "Cannot connect to the Docker daemon\n")

    monkeypatch.setattr(executor_module.CommandExecutor, "execute", failing)

    assert main(["pull", "busybox"]) == 1
    err = capsys.readouterr().err
    assert err.count("Cannot connect to the Docker daemon") == 1


def test_main_rejects_invalid_config(
    workdir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (workdir / "config.json").write_text("[]", encoding="utf-8")

    assert main(["ps"]) == 1
    assert "config.json" in capsys.readouterr().err


def test_parse_env_rejects_missing_separator() -> None:
    with pytest.raises(ValueError):
        main_module._parse_env(["NOVALUE"])
