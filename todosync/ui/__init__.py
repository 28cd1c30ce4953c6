"""
Terminal front end for todosync.
"""

from .console import TodoConsole, format_view

__all__ = ['TodoConsole', 'format_view']
