"""Драйвер docker CLI и сопутствующие типы."""

from .driver import Driver
from .exceptions import (
    BridgeIPNotFoundError,
    DockerExecuteError,
    DockerNotFoundError,
    DockerOutputError,
    DockerTimeoutError,
    DriverError,
)
from .executor import CommandExecutor
from .models import CommandResult, ContainerParams, ContainerState

__all__ = [
    "Driver",
    "CommandExecutor",
    "CommandResult",
    "ContainerParams",
    "ContainerState",
    "DriverError",
    "DockerNotFoundError",
    "DockerExecuteError",
    "DockerTimeoutError",
    "DockerOutputError",
    "BridgeIPNotFoundError",
]
