"""Interactive terminal front end."""

from .loop import repl_loop

__all__ = ["repl_loop"]
