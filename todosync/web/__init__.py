"""
Remote Store server

Provides the /todos REST API backed by an in-memory list:
- TodoStore: in-memory todo records
- todo_bp / init_routes: Flask Blueprint with the REST endpoints
- TodoWebServer: Flask application wrapper
"""

from .store import TodoStore, TodoNotFound
from .schemas import ValidationError
from .routes import todo_bp, init_routes
from .webserver import TodoWebServer, create_app

__all__ = [
    'TodoStore', 'TodoNotFound', 'ValidationError',
    'todo_bp', 'init_routes',
    'TodoWebServer', 'create_app',
]
