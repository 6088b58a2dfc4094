"""Разбор текстового вывода docker CLI и ip."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, Sequence

from docker_provider.driver.exceptions import DockerOutputError

# строка вида "    inet 172.17.42.1/16 scope global docker0"
_INET_PATTERN = re.compile(r"^\s+inet ([0-9.]+)/[0-9]+\s+", re.MULTILINE)


def split_lines(output: Optional[str]) -> List[str]:
    """Разбивает вывод по строкам, отбрасывая пустые."""

    if not output:
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def contains_line(output: Optional[str], value: str) -> bool:
    """Проверяет, что value встречается в выводе отдельной строкой целиком."""

    return value in split_lines(output)


def parse_inspect_output(command: Sequence[str], output: Optional[str]) -> Dict[str, Any]:
    """Возвращает первый объект из JSON-массива docker inspect."""

    if not output or not output.strip():
        raise DockerOutputError(command, "empty output")
    try:
        payload = json.loads(output)
    except ValueError as exc:
        raise DockerOutputError(command, f"invalid JSON: {exc}") from exc
    if not isinstance(payload, list) or not payload:
        raise DockerOutputError(command, "expected a non-empty JSON array")
    first = payload[0]
    if not isinstance(first, dict):
        raise DockerOutputError(command, "expected a JSON object as the first element")
    return first


def extract_ipv4(output: Optional[str]) -> Optional[str]:
    """Вытаскивает первый адрес из строки `inet A.B.C.D/NN` или None."""

    match = _INET_PATTERN.search(output or "")
    if match is None:
        return None
    return match.group(1)
