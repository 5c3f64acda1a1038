# src/utils/logging_setup.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional, Union

import src.utils.settings as settings

_FMT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"


def configure_logging(level: int = logging.INFO, *, log_to_file: bool = True) -> None:
    """
    Configure root logging with a readable format and optional file sink.
    Silences noisy third-party loggers by default.
    """
    logging.basicConfig(level=level, format=_FMT, datefmt=_DATEFMT)

    # Tone down chatty libraries
    for noisy in ("PIL", "asyncio", "OpenGL"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if log_to_file:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        path = os.path.join(settings.LOG_DIR, f"{settings.LOG_FILE_PREFIX}-{ts}.log")
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(_FMT, _DATEFMT))
        logging.getLogger().addHandler(fh)


def setup_logging(level: Optional[Union[int, str]] = None, *, log_to_file: bool = False) -> None:
    """Entry-point flavour: level from argument or MEEMS_LOG_LEVEL."""
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    configure_logging(level, log_to_file=log_to_file)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"meems.{name}")
