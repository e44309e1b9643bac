from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass

from bibgrammar.core.errors import ConfigurationError

DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class Settings:
    encoding: str
    log_level: int | None


def load_settings() -> Settings:
    encoding = os.getenv("BIBGRAMMAR_ENCODING") or DEFAULT_ENCODING
    try:
        encoding = codecs.lookup(encoding).name
    except LookupError as exc:
        raise ConfigurationError(f"Unknown encoding in BIBGRAMMAR_ENCODING: {encoding}") from exc

    log_level: int | None = None
    level_raw = os.getenv("BIBGRAMMAR_LOG_LEVEL")
    if level_raw:
        resolved = logging.getLevelName(level_raw.strip().upper())
        if not isinstance(resolved, int):
            raise ConfigurationError(f"Unknown log level in BIBGRAMMAR_LOG_LEVEL: {level_raw}")
        log_level = resolved

    return Settings(encoding=encoding, log_level=log_level)
