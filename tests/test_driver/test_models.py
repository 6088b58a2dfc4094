"""Тесты моделей драйвера."""

from __future__ import annotations

import pytest

from docker_provider.driver.models import ContainerParams, ContainerState


def test_from_dict_normalizes_scalars() -> None:
    params = ContainerParams.from_dict(
        {
            "image": "busybox",
            "cmd": "sh",
            "ports": "8080:80",
            "volumes": ["/a:/a", "/b:/b"],
            "links": [("db", "database"), "cache:redis", "queue"],
            "env": {"DEBUG": 1},
        }
    )
    assert params.cmd == ["sh"]
    assert params.ports == ["8080:80"]
    assert params.volumes == ["/a:/a", "/b:/b"]
    assert params.links == [("db", "database"), ("cache", "redis"), ("queue", "queue")]
    assert params.env == {"DEBUG": "1"}
    assert params.detach is True
    assert params.privileged is False


def test_from_dict_requires_image() -> None:
    with pytest.raises(ValueError):
        ContainerParams.from_dict({"name": "no-image"})


def test_container_state_values() -> None:
    assert ContainerState("not_created") is ContainerState.NOT_CREATED
    assert ContainerState.RUNNING == "running"


def test_from_dict_renders_booleans_for_shell() -> None:
    params = ContainerParams.from_dict({"image": "busybox", "env": {"DEBUG": True, "CACHE": False}})
    assert params.env == {"DEBUG": "true", "CACHE": "false"}
