#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Central configuration access.
#
"""
Central configuration access helpers.
"""

import os
from dataclasses import dataclass
from typing import Any

from utils import load_config, merge_dicts


DEFAULT_CONFIG_PATH = "cfg/config.yaml"
CONFIG_ENV_VAR = "SCRIPTORIUM_CONFIG"

DEFAULTS: dict[str, Any] = {
    "database": {
        "host": "localhost",
        "port": 3306,
        "name": "scriptorium",
        "user": "",
        "password": "",
        "pool_size": 10,
        "connect_timeout": 5,
    },
    "auth": {
        "max_session_period": "24h",
        "failures_before_penalty": 1,
        "time_format": "%Y-%m-%d %H:%M:%S",
    },
    "api": {
        "title": "Scriptorium API",
        "request_timeout_seconds": 5,
    },
    "tables": {
        "users": "users",
        "credentials": "credentials",
        "content": "page_content",
        "blog_index": "blog_pages",
        "static_index": "static_pages",
    },
}


def resolve_config_path(config_path: str | None = None) -> str:
    return config_path or os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)


def merge_config(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Apply overrides on top of the built-in defaults."""
    return merge_dicts(DEFAULTS, overrides or {})


def get_config(config_path: str | None = None) -> dict[str, Any]:
    return merge_config(load_config(config_path=resolve_config_path(config_path)))


def get_config_section(
    section: str | None = None,
    config_path: str | None = None,
) -> dict[str, Any]:
    config = get_config(config_path)
    if section:
        return config.get(section, {})
    return config


@dataclass(frozen=True)
class TableNames:
    users: str
    credentials: str
    content: str
    blog_index: str
    static_index: str

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "TableNames":
        tables = merge_dicts(DEFAULTS["tables"], config.get("tables", {}))
        return cls(**{field: tables[field] for field in cls.__dataclass_fields__})
