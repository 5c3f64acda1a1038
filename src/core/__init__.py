"""Core package marker: demo app and safe entrypoint."""
__all__ = ["app", "safe_main"]
