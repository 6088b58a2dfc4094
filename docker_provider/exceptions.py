"""Общая база исключений docker-provider."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

# атрибут LogRecord, по которому консоль CLI узнаёт самоотчёт исключения
ERROR_CONTEXT_ATTR = "error_context"


class ProviderError(Exception):
    """Ошибка с контекстом; при создании пишется в лог модуля, где объявлен класс.

    Запись уходит в файл логов целиком, а консольный обработчик CLI её
    пропускает: пользователю сообщение печатает сама точка входа.
    """

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)
        logging.getLogger(type(self).__module__).error(
            "%s: %s | context=%s",
            type(self).__name__,
            message,
            self.context,
            extra={ERROR_CONTEXT_ATTR: self.context},
        )
