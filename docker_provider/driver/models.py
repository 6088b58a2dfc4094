"""Структуры данных, которыми оперирует драйвер."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union


class ContainerState(str, Enum):
    """Состояние контейнера с точки зрения провайдера."""

    RUNNING = "running"
    STOPPED = "stopped"
    NOT_CREATED = "not_created"


@dataclass(slots=True)
class CommandResult:
    """Результат выполнения внешней команды."""

    command: Tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""


@dataclass(slots=True)
class ContainerParams:
    """Параметры docker run для создания контейнера."""

    image: str
    cmd: List[str] = field(default_factory=list)
    ports: List[str] = field(default_factory=list)
    volumes: List[str] = field(default_factory=list)
    detach: bool = True
    links: List[Tuple[str, str]] = field(default_factory=list)
    env: Dict[str, Any] = field(default_factory=dict)
    name: Optional[str] = None
    hostname: Optional[str] = None
    privileged: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContainerParams":
        """Строит параметры из словаря (ключи как у docker run)."""

        image = data.get("image")
        if not image:
            raise ValueError("Container image is required")
        return cls(
            image=str(image),
            cmd=_as_list(data.get("cmd")),
            ports=_as_list(data.get("ports")),
            volumes=_as_list(data.get("volumes")),
            detach=bool(data.get("detach", True)),
            links=[_as_link(link) for link in data.get("links") or []],
            env={str(key): format_env_value(value) for key, value in (data.get("env") or {}).items()},
            name=data.get("name"),
            hostname=data.get("hostname"),
            privileged=bool(data.get("privileged", False)),
        )


def _as_link(value: Union[str, Sequence[Any]]) -> Tuple[str, str]:
    # допускаем как пару (контейнер, алиас), так и строку "контейнер:алиас"
    if isinstance(value, str):
        source, _, alias = value.partition(":")
        return source, alias or source
    source, alias = value
    return str(source), str(alias)


def format_env_value(value: Any) -> str:
    # булевы значения пишем как true/false, как их ждут скрипты в контейнере
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_list(value: Union[None, str, Sequence[Any]]) -> List[str]:
    # одиночное строковое значение превращаем в список из одного элемента
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]
