"""UI package marker: widget tree and the pygame environment adapter."""
__all__ = ["widget", "pygame_root"]
