"""Исключения драйвера docker CLI."""

from __future__ import annotations

from typing import Sequence

from docker_provider.exceptions import ProviderError
from docker_provider.utils.helpers import format_command


class DriverError(ProviderError):
    """Любой сбой при вызове docker CLI или разборе его вывода."""


class DockerNotFoundError(DriverError):
    """Исполняемый файл docker (или ip) не найден."""

    def __init__(self, binary: str) -> None:
        self.binary = binary
        super().__init__(
            f"Executable '{binary}' not found, is it installed and on PATH?",
            context={"binary": binary},
        )


class DockerExecuteError(DriverError):
    """Команда завершилась с ненулевым кодом возврата."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = tuple(command)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        output = (stdout + stderr).strip()
        super().__init__(
            f"Command '{format_command(self.command)}' failed with exit code {exit_code}\n{output}",
            context={"command": list(self.command), "exit_code": exit_code},
        )


class DockerTimeoutError(DriverError):
    """Команда не уложилась в заданный таймаут."""

    def __init__(self, command: Sequence[str], timeout: float) -> None:
        self.command = tuple(command)
        self.timeout = timeout
        super().__init__(
            f"Command '{format_command(self.command)}' timed out after {timeout} seconds",
            context={"command": list(self.command), "timeout": timeout},
        )


class DockerOutputError(DriverError):
    """Вывод команды пустой или не удаётся его разобрать."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        self.command = tuple(command)
        self.reason = reason
        super().__init__(
            f"Unexpected output from '{format_command(self.command)}': {reason}",
            context={"command": list(self.command), "reason": reason},
        )


class BridgeIPNotFoundError(DockerOutputError):
    """В выводе ip addr не нашлось IPv4 адреса бриджа."""

    def __init__(self, command: Sequence[str], interface: str) -> None:
        self.interface = interface
        super().__init__(command, f"no IPv4 address found for interface {interface}")
