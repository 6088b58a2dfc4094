"""Тесты исключений драйвера."""

from __future__ import annotations

import pytest

from docker_provider.driver.exceptions import (
    BridgeIPNotFoundError,
    DockerExecuteError,
    DockerNotFoundError,
    DockerOutputError,
    DriverError,
)
from docker_provider.exceptions import ProviderError


def test_execute_error_message_and_logging(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR")
    error = DockerExecuteError(["docker", "rm", "-f", "-v", "abc"], 1, "", "conflict\n")
    assert "docker rm -f -v abc" in str(error)
    assert "conflict" in str(error)
    assert error.context["exit_code"] == 1
    assert "docker rm -f -v abc" in caplog.text


def test_not_found_error_names_binary() -> None:
    error = DockerNotFoundError("docker")
    assert isinstance(error, DriverError)
    assert "'docker'" in str(error)


def test_bridge_error_is_output_error() -> None:
    error = BridgeIPNotFoundError(("/sbin/ip", "-4", "addr"), "docker0")
    assert isinstance(error, DockerOutputError)
    assert error.interface == "docker0"
    assert "docker0" in str(error)


def test_driver_errors_share_provider_base() -> None:
    error = DockerNotFoundError("/sbin/ip")
    assert isinstance(error, ProviderError)
    assert error.context == {"binary": "/sbin/ip"}
