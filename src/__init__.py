"""
Top-level package marker for meems-events.

Having an __init__ here ensures imports like
`from src.events import DomEvents` work consistently on all environments,
including tools and test runners that don't inject the project root to sys.path.
"""
__all__ = ["core", "events", "ui", "utils"]
