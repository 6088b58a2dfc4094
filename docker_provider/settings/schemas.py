"""Дефолтная схема config.json драйвера."""

from __future__ import annotations

from typing import Any, Dict

# DEFAULT_CONFIG служит шаблоном для начального config.json
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "driver": {
        "docker_binary": "docker",
        "ip_binary": "/sbin/ip",
        "bridge_interface": "docker0",
        "docker_host": "",
        "command_timeout_sec": 0,
        "stop_timeout_sec": 1,
    },
    "logging": {
        "enabled": True,
        "level": "INFO",
        "max_file_size_mb": 10,
        "max_archived_files": 5,
    },
}
