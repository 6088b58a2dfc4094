"""Драйвер docker-провайдера.

Каждая операция собирает argv для docker CLI, выполняет его через
`Driver.execute` и разбирает текстовый вывод. Состояние контейнеров
хранится только в docker daemon, драйвер ничего не кэширует.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from docker_provider.driver import parsers
from docker_provider.driver.exceptions import BridgeIPNotFoundError
from docker_provider.driver.executor import CommandExecutor, OutputCallback
from docker_provider.driver.models import ContainerParams, ContainerState, format_env_value

LOGGER = logging.getLogger(__name__)

DEFAULT_DOCKER_BINARY = "docker"
DEFAULT_IP_BINARY = "/sbin/ip"
DEFAULT_BRIDGE_INTERFACE = "docker0"


class Driver:
    """Транслирует операции над контейнерами в вызовы docker CLI."""

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        *,
        docker_binary: str = DEFAULT_DOCKER_BINARY,
        ip_binary: str = DEFAULT_IP_BINARY,
        bridge_interface: str = DEFAULT_BRIDGE_INTERFACE,
    ) -> None:
        self._executor = executor or CommandExecutor()
        self.docker_binary = docker_binary
        self.ip_binary = ip_binary
        self.bridge_interface = bridge_interface

    @classmethod
    def from_settings(cls, settings: Any) -> "Driver":
        """Создаёт драйвер по группе настроек driver."""

        group = settings.get_group("driver")
        executor = CommandExecutor(
            docker_host=group.get("docker_host"),
            timeout_seconds=group.get("command_timeout_sec"),
        )
        return cls(
            executor,
            docker_binary=group.get("docker_binary"),
            ip_binary=group.get("ip_binary"),
            bridge_interface=group.get("bridge_interface"),
        )

    # --------------------------------------------------------------- lifecycle
    def create(self, params: Union[ContainerParams, Mapping[str, Any]]) -> str:
        """Запускает docker run и возвращает идентификатор нового контейнера."""

        if not isinstance(params, ContainerParams):
            params = ContainerParams.from_dict(params)

        run_cmd: List[str] = [self.docker_binary, "run"]
        if params.name:
            run_cmd += ["--name", params.name]
        if params.detach:
            run_cmd.append("-d")
        for port in params.ports:
            run_cmd += ["-p", port]
        for volume in params.volumes:
            run_cmd += ["-v", volume]
        for source, alias in params.links:
            run_cmd += ["--link", f"{source}:{alias}"]
        for key, value in params.env.items():
            run_cmd += ["-e", f"{key}={format_env_value(value)}"]
        if params.privileged:
            run_cmd.append("--privileged")
        if params.hostname:
            run_cmd += ["-h", params.hostname]
        run_cmd.append(params.image)
        run_cmd += params.cmd

        LOGGER.info("Creating container from image %s", params.image)
        output = self.execute(*run_cmd)
        return (output or "").strip()

    def is_created(self, cid: str) -> bool:
        """Контейнер существует (запущен или остановлен)."""

        output = self.execute(self.docker_binary, "ps", "-a", "-q", "--no-trunc")
        return parsers.contains_line(output, cid)

    def is_running(self, cid: str) -> bool:
        """Контейнер присутствует в списке запущенных."""

        output = self.execute(self.docker_binary, "ps", "-q", "--no-trunc")
        return parsers.contains_line(output, cid)

    def is_privileged(self, cid: str) -> bool:
        host_config = self.inspect_container(cid).get("HostConfig") or {}
        return bool(host_config.get("Privileged", False))

    def state(self, cid: str) -> ContainerState:
        """Сводит running/created в одно состояние."""

        if self.is_running(cid):
            return ContainerState.RUNNING
        if self.is_created(cid):
            return ContainerState.STOPPED
        return ContainerState.NOT_CREATED

    def start(self, cid: str) -> None:
        if self.is_running(cid):
            LOGGER.debug("Container %s is already running", cid)
            return
        LOGGER.info("Starting container %s", cid)
        self.execute(self.docker_binary, "start", cid)

    def stop(self, cid: str, timeout: int = 1) -> None:
        """Останавливает контейнер, давая ему timeout секунд на завершение."""

        if not self.is_running(cid):
            LOGGER.debug("Container %s is not running, nothing to stop", cid)
            return
        LOGGER.info("Stopping container %s (timeout %ss)", cid, timeout)
        self.execute(self.docker_binary, "stop", "-t", str(timeout), cid)

    def rm(self, cid: str) -> None:
        """Удаляет контейнер вместе с томами, если он был создан."""

        if not self.is_created(cid):
            LOGGER.debug("Container %s does not exist, nothing to remove", cid)
            return
        LOGGER.info("Removing container %s", cid)
        self.execute(self.docker_binary, "rm", "-f", "-v", cid)

    def pull(self, image: str, on_output: Optional[OutputCallback] = None) -> None:
        LOGGER.info("Pulling image %s", image)
        self.execute(self.docker_binary, "pull", image, on_output=on_output)

    # ----------------------------------------------------------------- queries
    def inspect_container(self, cid: str) -> Dict[str, Any]:
        """Возвращает первый элемент JSON-массива docker inspect."""

        command = (self.docker_binary, "inspect", cid)
        output = self.execute(*command)
        return parsers.parse_inspect_output(command, output)

    def all_containers(self) -> List[str]:
        """Все идентификаторы контейнеров, включая остановленные, без усечения."""

        output = self.execute(self.docker_binary, "ps", "-a", "-q", "--no-trunc")
        return parsers.split_lines(output)

    def docker_bridge_ip(self) -> str:
        """IPv4 адрес интерфейса docker0 на хосте."""

        command = (
            self.ip_binary,
            "-4",
            "addr",
            "show",
            "scope",
            "global",
            self.bridge_interface,
        )
        output = self.execute(*command)
        address = parsers.extract_ipv4(output)
        if address is None:
            raise BridgeIPNotFoundError(command, self.bridge_interface)
        return address

    # ---------------------------------------------------------------- primitive
    def execute(self, *command: str, on_output: Optional[OutputCallback] = None) -> str:
        """Единственная точка запуска внешних процессов (подменяется в тестах)."""

        return self._executor.execute(*command, on_output=on_output)
