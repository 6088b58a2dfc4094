"""Ошибки чтения и проверки config.json драйвера."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from docker_provider.exceptions import ProviderError


class SettingsError(ProviderError):
    """Конфигурация драйвера недоступна или некорректна."""


class SettingsNotFoundError(SettingsError):
    """Запрошена группа или ключ, которых нет в схеме config.json."""

    def __init__(self, group: str, key: Optional[str] = None) -> None:
        self.group = group
        self.key = key
        name = f"{group}.{key}" if key else group
        super().__init__(
            f"Unknown setting '{name}'",
            context={"group": group, "key": key},
        )


class SettingsValidationError(SettingsError):
    """Значение не прошло валидатор своей группы."""

    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid value {value!r} for '{key}': {reason}",
            context={"key": key, "value": value, "reason": reason},
        )


class SettingsIOError(SettingsError):
    """config.json не читается, не пишется или содержит не JSON-объект."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(
            f"Cannot use config file {path}: {reason}",
            context={"path": str(path), "reason": reason},
        )
