# --- FILE: src/utils/__init__.py
"""
Utilities package marker: settings, logging, error reporting, pygame bootstrap.
"""

__all__ = ["settings", "logging_setup", "error_report", "pygame_bootstrap"]
