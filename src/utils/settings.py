# src/utils/settings.py
"""
Centralized settings and constants for the event engine and demo app.

Values can be overridden through environment variables so CI and local runs
can flip behaviour without touching code.
"""
import os


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# --- Input Settings ---
# "auto" picks touch when pygame reports a touch device, otherwise mouse.
INPUT_MODE = os.environ.get("MEEMS_INPUT_MODE", "auto").strip().lower()
INPUT_MODES = ("auto", "mouse", "touch")

# --- Delegation Settings ---
# When an armed take-over does not match the occurrence's ancestor chain,
# the occurrence is swallowed. Set to True to fall back to normal dispatch.
INTERCEPT_FALLTHROUGH = _env_flag("MEEMS_INTERCEPT_FALLTHROUGH", False)

# Root-level native subscriptions live as long as the engine does.
# False detaches a type's subscription once none of its bindings has callbacks.
RETAIN_NATIVE_SUBSCRIPTIONS = _env_flag("MEEMS_RETAIN_NATIVE", True)

# Handler.fire stops on an explicit False return only when this is on.
HANDLER_STOP_ON_FALSE = False

# --- Logging Settings ---
LOG_LEVEL = os.environ.get("MEEMS_LOG_LEVEL", "INFO").upper()
LOG_DIR = "logs"
LOG_FILE_PREFIX = "meems"

# --- Demo Window Settings ---
HEADLESS = _env_flag("MEEMS_HEADLESS", False)
SCREEN_WIDTH = 640
SCREEN_HEIGHT = 360
FPS = 60
WINDOW_CAPTION = "meems-events demo"
BG_COLOR = (0, 0, 0)

TOOLBAR_HEIGHT = 48
TOOLBAR_BG_COLOR = (10, 10, 30)
BUTTON_WIDTH = 120
BUTTON_PADDING = 8
BUTTON_COLOR = (40, 40, 40)
BUTTON_HOVER_COLOR = (60, 60, 80)
BUTTON_BORDER_COLOR = (150, 150, 150)
BUTTON_TEXT_COLOR = (240, 240, 240)
BUTTON_FONT_SIZE = 16
