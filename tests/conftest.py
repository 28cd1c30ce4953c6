"""
Shared fixtures for todosync tests
"""

import asyncio
import sys
import threading
from pathlib import Path

import pytest
from flask import Flask, Response
from werkzeug.serving import make_server

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from todosync.core.errors import NotFoundError, RemoteStoreError
from todosync.core.models import Todo
from todosync.web.store import TodoStore
from todosync.web.webserver import create_app


class FakeApi:
    """
    In-process Remote Store double.

    Operations listed in fail_ops raise RemoteStoreError; ids in
    fail_delete_ids fail only their own delete.
    """

    def __init__(self, todos=None, fail_ops=(), fail_delete_ids=()):
        self.todos = list(todos or [])
        self.fail_ops = set(fail_ops)
        self.fail_delete_ids = set(fail_delete_ids)
        self.calls = []
        self.next_id = max((todo.id for todo in self.todos), default=0) + 1

    async def fetch_todos(self):
        self.calls.append(('fetch',))
        await asyncio.sleep(0)
        if 'fetch' in self.fail_ops:
            raise RemoteStoreError("Could not load todos from the server.", status=500)
        return list(self.todos)

    async def create_todo(self, title, description=None):
        self.calls.append(('create', title))
        await asyncio.sleep(0)
        if 'create' in self.fail_ops:
            raise RemoteStoreError("Could not add the todo.", status=500)
        todo = Todo(id=self.next_id, title=title, description=description)
        self.next_id += 1
        self.todos.append(todo)
        return todo

    async def update_todo(self, todo_id, patch):
        self.calls.append(('update', todo_id, patch))
        await asyncio.sleep(0)
        if 'update' in self.fail_ops:
            raise NotFoundError("Could not update the todo.", status=404)
        return Todo(id=todo_id, title=patch.title or 'unchanged', is_done=bool(patch.is_done))

    async def delete_todo(self, todo_id):
        self.calls.append(('delete', todo_id))
        await asyncio.sleep(0)
        if 'delete' in self.fail_ops or todo_id in self.fail_delete_ids:
            raise RemoteStoreError("Could not delete the todo.", status=500)
        self.todos = [todo for todo in self.todos if todo.id != todo_id]


@pytest.fixture
def fake_api_class():
    return FakeApi


@pytest.fixture
def serve_app():
    """Serve Flask apps on random local ports; returns a function giving the base URL"""
    servers = []

    def start(app):
        server = make_server('127.0.0.1', 0, app, threaded=True)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append((server, thread))
        return f"http://127.0.0.1:{server.server_port}"

    yield start

    for server, thread in servers:
        server.shutdown()
        thread.join(timeout=5)


@pytest.fixture
def live_server(serve_app):
    """Real todo API on a random local port; gives (base_url, store)"""
    store = TodoStore()
    return serve_app(create_app(store)), store


@pytest.fixture
def broken_server(serve_app):
    """
    Server answering 2xx with bodies the client cannot decode:
    truncated JSON, plain text and a JSON object where a list is expected
    """
    app = Flask(__name__)

    @app.route('/todos', methods=['GET'])
    def truncated_list():
        return Response('[{"id": 1, "title": "A"', mimetype='application/json')

    @app.route('/todos', methods=['POST'])
    def plain_text_create():
        return Response('created', mimetype='text/plain', status=201)

    @app.route('/todos/<int:todo_id>', methods=['PATCH'])
    def plain_text_update(todo_id):
        return Response('ok', mimetype='text/plain')

    @app.route('/todos/<int:todo_id>', methods=['GET'])
    def wrong_shape(todo_id):
        return Response('{"todo": "missing"}', mimetype='application/json')

    @app.route('/todos/<int:todo_id>', methods=['DELETE'])
    def truncated_delete(todo_id):
        return Response('{oops', mimetype='application/json')

    return serve_app(app)
