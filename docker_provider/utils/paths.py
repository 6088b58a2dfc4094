"""Централизованное описание путей драйвера."""

from __future__ import annotations

import os
from pathlib import Path

# HOME_ENV_VAR позволяет переопределить рабочую директорию (удобно для тестов)
HOME_ENV_VAR = "DOCKER_PROVIDER_HOME"


def resolve_workdir() -> Path:
    """Возвращает базовую директорию, где лежат config.json и логи."""

    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".docker-provider"
