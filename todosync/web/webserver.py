"""
Flask web server exposing the todo Remote Store.
"""

import logging
from typing import Optional

from flask import Flask

from .routes import init_routes
from .store import TodoStore


def create_app(store: Optional[TodoStore] = None) -> Flask:
    """
    Build the Flask application

    Args:
        store: Store to serve; an empty one is created if omitted

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    init_routes(app, store if store is not None else TodoStore())
    return app


class TodoWebServer:
    """
    Web server for the todo REST API
    """

    def __init__(self, store: TodoStore, host: str = '127.0.0.1', port: int = 3000):
        """
        Initialize web server

        Args:
            store: TodoStore to serve
            host: Interface to bind
            port: Port to run server on
        """
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.host = host
        self.port = port
        self.flask_app = create_app(store)

    def serve_forever(self):
        """Run the Flask server in the current thread"""
        self.logger.info(f"Serving todos on http://{self.host}:{self.port}/todos")
        self.flask_app.run(host=self.host, port=self.port, debug=False, use_reloader=False)
