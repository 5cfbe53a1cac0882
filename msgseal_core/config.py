# msgseal_core/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import os


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings read from the environment.

    Only ambient concerns live here. Interop parameters (key size, padding,
    marker) are constants in msgseal_core.constants and are not tunable.
    """
    log_level: int = logging.INFO
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        level_name = os.getenv("MSGSEAL_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            level = logging.INFO
        return cls(
            log_level=level,
            log_file=os.getenv("MSGSEAL_LOG_FILE") or None,
        )
