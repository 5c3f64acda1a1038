# src/core/safe_main.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import src.utils.settings as settings


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="meems-events demo")
    p.add_argument("--headless", action="store_true", help="use SDL dummy drivers")
    p.add_argument("--smoke", type=float, default=None, metavar="SECONDS",
                   help="exit after SECONDS (CI smoke run)")
    p.add_argument("--input", choices=settings.INPUT_MODES, default=settings.INPUT_MODE,
                   help="pointer input mode (default: %(default)s)")
    p.add_argument("--log-level", default=settings.LOG_LEVEL)
    p.add_argument("--log-file", action="store_true", help="also log to logs/meems-<ts>.log")
    return p.parse_args(argv)


def run_app(argv: Optional[List[str]] = None) -> int:
    """
    Safe entrypoint runner:
      - Configures env for Linux/headless.
      - Initializes logging and the crash hook.
      - Runs the demo App; unexpected errors are logged and return 1.
    """
    args = _parse_args(argv)

    from src.utils.pygame_bootstrap import configure_environment, init_pygame_display
    from src.utils.logging_setup import setup_logging, get_logger
    from src.utils.error_report import install_excepthook

    headless = configure_environment(True if args.headless else None)
    setup_logging(args.log_level, log_to_file=args.log_file)
    install_excepthook()
    log = get_logger("safe_main")
    if headless:
        log.warning("Running without a visible display (SDL dummy).")

    import pygame
    from src.core.app import App
    from src.events.input_mode import detect_input_mode

    screen = init_pygame_display((settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT), headless=headless)
    try:
        app = App(screen, mode=detect_input_mode(args.input))
        return app.run(smoke=args.smoke)
    except Exception as e:
        log.exception("Unhandled exception in main loop: %s", e)
        return 1
    finally:
        pygame.quit()
        logging.shutdown()


if __name__ == "__main__":
    raise SystemExit(run_app())
