"""Запуск внешних команд (docker, ip) и сбор их вывода."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
import time
from queue import Empty, Queue
from typing import IO, Callable, Dict, List, Optional, Sequence, Tuple

from docker_provider.driver.exceptions import (
    DockerExecuteError,
    DockerNotFoundError,
    DockerTimeoutError,
)
from docker_provider.driver.models import CommandResult
from docker_provider.utils.helpers import format_command, normalize_socket_path

LOGGER = logging.getLogger(__name__)

OutputCallback = Callable[[str], None]

# после kill читатели должны увидеть EOF почти сразу
_READER_JOIN_TIMEOUT = 1.0


class CommandExecutor:
    """Синхронно выполняет argv без shell и возвращает stdout."""

    def __init__(self, docker_host: str = "", timeout_seconds: float = 0) -> None:
        self.docker_host = normalize_socket_path(docker_host or "")
        self.timeout_seconds = timeout_seconds

    def execute(self, *command: str, on_output: Optional[OutputCallback] = None) -> str:
        """Выполняет команду и возвращает stdout; при ненулевом коде бросает ошибку."""

        result = self.run(*command, on_output=on_output)
        if result.exit_code != 0:
            raise DockerExecuteError(result.command, result.exit_code, result.stdout, result.stderr)
        return result.stdout

    def run(self, *command: str, on_output: Optional[OutputCallback] = None) -> CommandResult:
        """Выполняет команду и возвращает CommandResult без проверки кода возврата."""

        argv = tuple(str(part) for part in command)
        if not argv:
            raise ValueError("Command must not be empty")
        LOGGER.debug("Executing: %s", format_command(argv))
        env = self._build_environment()
        try:
            if on_output is None:
                result = self._run_blocking(argv, env)
            else:
                result = self._run_streaming(argv, env, on_output)
        except FileNotFoundError as exc:
            raise DockerNotFoundError(argv[0]) from exc
        LOGGER.debug("Command %s exited with code %s", format_command(argv), result.exit_code)
        return result

    @property
    def timeout(self) -> Optional[float]:
        return None if self.timeout_seconds <= 0 else self.timeout_seconds

    def _build_environment(self) -> Dict[str, str]:
        """Формирует окружение для запуска docker-команд."""

        env = os.environ.copy()
        # без явной настройки DOCKER_HOST пользователя остаётся как есть
        if self.docker_host:
            env["DOCKER_HOST"] = self.docker_host
        return env

    def _run_blocking(self, argv: Sequence[str], env: Dict[str, str]) -> CommandResult:
        try:
            completed = subprocess.run(
                list(argv),
                check=False,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                env=env,
            )
        except subprocess.TimeoutExpired as exc:
            raise DockerTimeoutError(argv, self.timeout_seconds) from exc
        return CommandResult(
            command=tuple(argv),
            exit_code=completed.returncode,
            stdout=_normalize_newlines(completed.stdout),
            stderr=_normalize_newlines(completed.stderr),
        )

    def _run_streaming(
        self,
        argv: Sequence[str],
        env: Dict[str, str],
        on_output: OutputCallback,
    ) -> CommandResult:
        """Передаёт вывод построчно в on_output.

        stdout и stderr читаются фоновыми потоками в общую очередь, а
        on_output вызывается только из вызывающего потока, по одной строке
        за раз. Таймаут отсчитывается от запуска процесса и покрывает как
        чтение вывода, так и ожидание завершения. Если on_output бросает
        исключение или истёк таймаут, процесс убивается.
        """

        process = subprocess.Popen(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=env,
        )
        lines: "Queue[Tuple[str, Optional[str]]]" = Queue()
        readers = [
            threading.Thread(target=_pump, args=("stdout", process.stdout, lines), daemon=True),
            threading.Thread(target=_pump, args=("stderr", process.stderr, lines), daemon=True),
        ]
        for reader in readers:
            reader.start()

        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        collected: Dict[str, List[str]] = {"stdout": [], "stderr": []}
        open_streams = len(readers)
        try:
            while open_streams:
                try:
                    stream, line = lines.get(timeout=_remaining(deadline))
                except Empty:
                    raise DockerTimeoutError(argv, self.timeout_seconds) from None
                if line is None:
                    open_streams -= 1
                    continue
                collected[stream].append(line)
                on_output(line.rstrip("\r\n"))
            try:
                exit_code = process.wait(timeout=_remaining(deadline))
            except subprocess.TimeoutExpired as exc:
                raise DockerTimeoutError(argv, self.timeout_seconds) from exc
        finally:
            if process.poll() is None:
                LOGGER.warning("Killing %s", format_command(argv))
                process.kill()
                process.wait()
            for reader in readers:
                reader.join(timeout=_READER_JOIN_TIMEOUT)

        return CommandResult(
            command=tuple(argv),
            exit_code=exit_code,
            stdout=_normalize_newlines("".join(collected["stdout"])),
            stderr=_normalize_newlines("".join(collected["stderr"])),
        )


def _pump(name: str, stream: Optional[IO[str]], lines: "Queue[Tuple[str, Optional[str]]]") -> None:
    # None в очереди означает, что поток закрыт
    try:
        if stream is not None:
            with stream:
                for line in stream:
                    lines.put((name, line))
    finally:
        lines.put((name, None))


def _remaining(deadline: Optional[float]) -> Optional[float]:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


def _normalize_newlines(value: Optional[str]) -> str:
    # docker под Windows отдаёт \r\n
    return (value or "").replace("\r\n", "\n")
