"""Группы настроек драйвера с валидацией значений."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from docker_provider.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from docker_provider.settings.schemas import DEFAULT_CONFIG
from docker_provider.settings.validators import (
    CompositeValidator,
    EnumValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
    Validator,
)

# имя бинаря или путь к нему, без пробелов
BINARY_PATTERN = r"^[A-Za-z0-9_./\-]+$"
INTERFACE_PATTERN = r"^[A-Za-z0-9_.\-]{1,15}$"


class SettingsGroup(ABC):
    """Абстрактная база для конкретных групп настроек."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = {}
        self._validators: Dict[str, Validator] = {}
        self._values: Dict[str, Any] = {}
        self._initialize_defaults()
        self._setup_validators()
        self.reset_to_defaults()

    def _initialize_defaults(self) -> None:
        """Берёт значения по умолчанию из DEFAULT_CONFIG."""

        self._defaults = dict(DEFAULT_CONFIG[self.group_name])

    @abstractmethod
    def _setup_validators(self) -> None:
        """Привязывает валидаторы к ключам группы."""

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._defaults.keys())

    def get(self, key: str, default: Any = None) -> Any:
        """Возвращает значение настройки."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._values.get(key, default)

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        validator = self._validators.get(key)
        if not validator:
            return True, ""
        return validator.validate(value)

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение, выбрасывая ошибку при невалидных данных."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(
                key=f"{self.group_name}.{key}",
                value=value,
                reason=error,
            )
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Заполняет значениями из словаря; неизвестные ключи игнорируются."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def reset_to_defaults(self) -> None:
        self._values = dict(self._defaults)


class DriverSettings(SettingsGroup):
    """Параметры вызова docker CLI."""

    group_name = "driver"

    def _setup_validators(self) -> None:
        binary = CompositeValidator([TypeValidator(str), RegexValidator(BINARY_PATTERN)])
        self._validators = {
            "docker_binary": binary,
            "ip_binary": binary,
            "bridge_interface": RegexValidator(INTERFACE_PATTERN),
            "docker_host": TypeValidator(str),
            "command_timeout_sec": RangeValidator(0, 3600),
            "stop_timeout_sec": CompositeValidator([TypeValidator(int), RangeValidator(0, 600)]),
        }


class LoggingSettings(SettingsGroup):
    """Настройки логирования."""

    group_name = "logging"

    def _setup_validators(self) -> None:
        self._validators = {
            "enabled": TypeValidator(bool),
            "level": EnumValidator(["DEBUG", "INFO", "WARNING", "ERROR"]),
            "max_file_size_mb": RangeValidator(1, 1000),
            "max_archived_files": RangeValidator(1, 50),
        }
