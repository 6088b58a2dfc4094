"""Точка входа командной строки docker-provider."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from docker_provider import __version__
from docker_provider.driver import ContainerParams, Driver, DriverError
from docker_provider.settings.exceptions import SettingsError
from docker_provider.settings.registry import SettingsRegistry
from docker_provider.utils.logger import configure_logging
from docker_provider.utils.paths import resolve_workdir

LOGGER = logging.getLogger(__name__)


def initialize_settings(config_path: Path) -> SettingsRegistry:
    """Получает singleton реестр настроек и загружает config.json."""

    registry = SettingsRegistry(config_path=config_path)
    registry.load_from_disk()
    return registry


def setup_logging_from_settings(base_dir: Path, settings: Any) -> None:
    """Настраивает логирование в соответствии с группой logging."""

    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        log_dir=base_dir / "logs",
        level_name=logging_settings.get("level", "INFO"),
        max_bytes=logging_settings.get("max_file_size_mb", 10) * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files", 5),
    )


def initialize_workdir(base_dir: Path) -> bool:
    """Создаёт рабочую директорию с подкаталогом logs."""

    try:
        (base_dir / "logs").mkdir(parents=True, exist_ok=True)
        return True
    except OSError as exc:
        LOGGER.error("Failed to initialize work directory %s: %s", base_dir, exc)
        return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docker-provider",
        description="Manage provider containers through the docker CLI.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("ps", help="list all container ids, including stopped ones")
    commands.add_parser("bridge-ip", help="print the IPv4 address of the docker bridge")

    for name, help_text in (
        ("state", "print running, stopped or not_created"),
        ("start", "start a container unless it is running"),
        ("rm", "force-remove a container and its volumes"),
        ("inspect", "print docker inspect data as JSON"),
        ("privileged", "print whether a container runs privileged"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("container_id")

    stop = commands.add_parser("stop", help="stop a running container")
    stop.add_argument("container_id")
    stop.add_argument("-t", "--timeout", type=int, default=None)

    pull = commands.add_parser("pull", help="pull an image")
    pull.add_argument("image")

    run = commands.add_parser("run", help="create a container and print its id")
    run.add_argument("image")
    run.add_argument("cmd", nargs=argparse.REMAINDER)
    run.add_argument("--name")
    run.add_argument("-H", "--hostname")
    run.add_argument("-p", "--port", dest="ports", action="append", default=[])
    run.add_argument("-v", "--volume", dest="volumes", action="append", default=[])
    run.add_argument("--link", dest="links", action="append", default=[])
    run.add_argument("-e", "--env", dest="env", action="append", default=[])
    run.add_argument("--privileged", action="store_true")
    run.add_argument("--no-detach", dest="detach", action="store_false")
    return parser


def _parse_env(pairs: Sequence[str]) -> Dict[str, str]:
    env: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Environment entry must look like KEY=VALUE: {pair!r}")
        env[key] = value
    return env


def run_command(driver: Driver, args: argparse.Namespace, stop_timeout: int = 1) -> int:
    """Выполняет подкоманду и печатает результат в stdout."""

    command = args.command
    if command == "ps":
        for container_id in driver.all_containers():
            print(container_id)
    elif command == "bridge-ip":
        print(driver.docker_bridge_ip())
    elif command == "state":
        print(driver.state(args.container_id).value)
    elif command == "start":
        driver.start(args.container_id)
    elif command == "stop":
        timeout = stop_timeout if args.timeout is None else args.timeout
        driver.stop(args.container_id, timeout)
    elif command == "rm":
        driver.rm(args.container_id)
    elif command == "inspect":
        print(json.dumps(driver.inspect_container(args.container_id), indent=2))
    elif command == "privileged":
        print("true" if driver.is_privileged(args.container_id) else "false")
    elif command == "pull":
        driver.pull(args.image, on_output=print)
    elif command == "run":
        params = ContainerParams.from_dict(
            {
                "image": args.image,
                "cmd": args.cmd,
                "ports": args.ports,
                "volumes": args.volumes,
                "links": args.links,
                "env": _parse_env(args.env),
                "name": args.name,
                "hostname": args.hostname,
                "privileged": args.privileged,
                "detach": args.detach,
            }
        )
        print(driver.create(params))
    else:  # pragma: no cover - argparse не пропустит
        raise ValueError(f"Unknown command: {command}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Готовит окружение, загружает настройки и выполняет подкоманду."""

    args = build_parser().parse_args(argv)
    base_dir = resolve_workdir()
    if not initialize_workdir(base_dir):
        return 1

    try:
        settings = initialize_settings(base_dir / "config.json")
    except SettingsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    setup_logging_from_settings(base_dir, settings)

    driver = Driver.from_settings(settings)
    LOGGER.debug("docker-provider %s running '%s'", __version__, args.command)
    try:
        return run_command(
            driver,
            args,
            stop_timeout=settings.get_value("driver", "stop_timeout_sec"),
        )
    except (DriverError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
