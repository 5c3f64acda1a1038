from __future__ import annotations

"""
Process-level error channel and crash capture.

- report_exception(): where the event engine sends callback errors it
  isolated during dispatch. Forwards to the installed sink, or logs
  with traceback when none is installed.
- install_excepthook(): write logs/crash_YYYYMMDD_HHMMSS.txt for anything
  that escapes the main loop.
"""

import logging
import os
import sys
import time
import traceback
from typing import Callable, Optional

import src.utils.settings as settings

__all__ = ["install_excepthook", "report_exception", "set_error_sink"]

logger = logging.getLogger(__name__)

ErrorSink = Callable[[BaseException, str], None]

_sink: Optional[ErrorSink] = None


def set_error_sink(sink: Optional[ErrorSink]) -> Optional[ErrorSink]:
    """Install a sink for reported errors. Returns the previous one."""
    global _sink
    previous, _sink = _sink, sink
    return previous


def report_exception(exc: BaseException, context: str = "") -> None:
    """Send an isolated error to the installed sink, or log it if there is none."""
    if _sink is not None:
        _sink(exc, context)
        return
    logger.error(
        "Unhandled error%s: %s",
        f" in {context}" if context else "",
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
    )


def _log_dir() -> str:
    d = os.path.join(os.getcwd(), settings.LOG_DIR)
    os.makedirs(d, exist_ok=True)
    return d


def _write_crash_file(tb: str) -> str:
    stamp = time.strftime("%Y%m%d_%H%M%S")
    path = os.path.join(_log_dir(), f"crash_{stamp}.txt")
    with open(path, "w", encoding="utf-8") as f:
        f.write(tb)
    return path


def install_excepthook() -> None:
    def _hook(exc_type, exc, tb):
        full = "".join(traceback.format_exception(exc_type, exc, tb))
        path = _write_crash_file(full)
        print(f"\n[Crash] Unhandled exception written to {path}\n", file=sys.stderr)
        # Re-raise so debuggers/CI still fail properly
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _hook
