"""
Built-in tools.

Every concrete Tool subclass defined in a module of this package is found by
discovery; adding a tool means adding a module here, nothing else.
"""

from .base import Tool, render_error, render_page

__all__ = ["Tool", "render_error", "render_page"]
