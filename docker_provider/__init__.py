"""Драйвер docker-провайдера: управление контейнерами через docker CLI."""

from __future__ import annotations

import logging

__version__ = "0.1.0"

# пока CLI не настроил логирование, ошибки не должны уходить в stderr через lastResort
logging.getLogger(__name__).addHandler(logging.NullHandler())
