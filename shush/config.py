from __future__ import annotations
import os
from typing import Optional

from .constants import DEFAULTS, ENV_PREFIX

# Public API for config access; environment overrides the built-in defaults


def env_name(key: str) -> str:
    return f"{ENV_PREFIX}{key.upper()}"


def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(env_name(key))
    if value is not None:
        return value
    return DEFAULTS.get(key, default)


def get_all() -> dict:
    return {k: get_value(k) for k in sorted(DEFAULTS)}
