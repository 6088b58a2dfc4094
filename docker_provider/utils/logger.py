"""Настройка логирования для CLI docker-provider.

Файл driver.log получает всё. Консоль (stderr, stdout занят результатами
команд) не дублирует записи, которые исключения проекта пишут о себе сами:
их текст CLI печатает отдельно.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final

from docker_provider.exceptions import ERROR_CONTEXT_ATTR

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"
LOG_FILE_NAME: Final[str] = "driver.log"


class SelfReportedErrorFilter(logging.Filter):
    """Отбрасывает записи, созданные конструктором ProviderError."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not hasattr(record, ERROR_CONTEXT_ATTR)


def resolve_log_level(level_name: str) -> int:
    """Уровень из строки вроде "debug"; неизвестное имя даёт ValueError."""

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


def configure_logging(
    log_dir: Path,
    *,
    level_name: str = "INFO",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> Path:
    """Подключает ротацию driver.log и консоль в stderr; возвращает путь к файлу."""

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console_handler.addFilter(SelfReportedErrorFilter())

    logging.basicConfig(
        level=resolve_log_level(level_name),
        handlers=[file_handler, console_handler],
        force=True,
    )
    return log_file
