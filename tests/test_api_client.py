"""
Tests for the aiohttp Remote Store client against a live local server
"""

import asyncio

import pytest

from todosync.client.api import TodoApiClient
from todosync.core.errors import NotFoundError, RemoteStoreError
from todosync.core.models import TodoPatch


def run(coro):
    return asyncio.run(coro)


def test_create_fetch_update_delete(live_server):
    base_url, store = live_server

    async def scenario():
        async with TodoApiClient(base_url) as api:
            created = await api.create_todo('Buy milk', description='2 litres')
            fetched = await api.fetch_todos()
            updated = await api.update_todo(created.id, TodoPatch(is_done=True))
            single = await api.get_todo(created.id)
            await api.delete_todo(created.id)
            remaining = await api.fetch_todos()
            return created, fetched, updated, single, remaining

    created, fetched, updated, single, remaining = run(scenario())

    assert created.id == 1
    assert created.description == '2 litres'
    assert created.created_at is not None
    assert fetched == [created]
    assert updated.is_done is True
    assert single == updated
    assert remaining == []
    assert store.find_all() == []


def test_unknown_id_raises_not_found(live_server):
    base_url, _ = live_server

    async def scenario():
        async with TodoApiClient(base_url) as api:
            with pytest.raises(NotFoundError) as excinfo:
                await api.delete_todo(99)
            return excinfo.value

    error = run(scenario())

    assert error.status == 404
    assert error.message == "Could not delete the todo."


def test_validation_failure_raises_remote_error(live_server):
    base_url, _ = live_server

    async def scenario():
        async with TodoApiClient(base_url) as api:
            with pytest.raises(RemoteStoreError) as excinfo:
                await api.create_todo('x' * 80)
            return excinfo.value

    error = run(scenario())

    assert error.status == 400
    assert not isinstance(error, NotFoundError)


def test_connection_failure_is_wrapped():
    async def scenario():
        async with TodoApiClient('http://127.0.0.1:1', timeout=2.0) as api:
            with pytest.raises(RemoteStoreError) as excinfo:
                await api.fetch_todos()
            return excinfo.value

    error = run(scenario())

    assert error.status is None
    assert error.message == "Could not load todos from the server."


def test_borrowed_session_is_not_closed(live_server):
    import aiohttp

    base_url, store = live_server
    store.create('seeded')

    async def scenario():
        async with aiohttp.ClientSession() as session:
            async with TodoApiClient(base_url, session=session) as api:
                todos = await api.fetch_todos()
            return todos, session.closed

    todos, closed = run(scenario())

    assert [todo.title for todo in todos] == ['seeded']
    assert closed is False, "Client must not close a session it does not own"


def test_truncated_json_raises_remote_error(broken_server):
    async def scenario():
        async with TodoApiClient(broken_server) as api:
            errors = []
            for call in (api.fetch_todos(), api.delete_todo(1)):
                with pytest.raises(RemoteStoreError) as excinfo:
                    await call
                errors.append(excinfo.value)
            return errors

    fetch_error, delete_error = run(scenario())

    assert fetch_error.message == "Could not load todos from the server."
    assert delete_error.message == "Could not delete the todo."
    assert "Invalid response" in delete_error.detail


def test_non_json_success_body_raises_remote_error(broken_server):
    async def scenario():
        async with TodoApiClient(broken_server) as api:
            with pytest.raises(RemoteStoreError) as create_info:
                await api.create_todo('Buy milk')
            with pytest.raises(RemoteStoreError) as update_info:
                await api.update_todo(1, TodoPatch(is_done=True))
            with pytest.raises(RemoteStoreError) as get_info:
                await api.get_todo(1)
            return create_info.value, update_info.value, get_info.value

    create_error, update_error, get_error = run(scenario())

    assert create_error.message == "Could not add the todo."
    assert update_error.message == "Could not update the todo."
    assert get_error.message == "Could not load todo 1."


def test_fetch_rejects_non_list_answer(serve_app):
    from flask import Flask, jsonify

    app = Flask(__name__)

    @app.route('/todos')
    def not_a_list():
        return jsonify({'todos': []})

    base_url = serve_app(app)

    async def scenario():
        async with TodoApiClient(base_url) as api:
            with pytest.raises(RemoteStoreError) as excinfo:
                await api.fetch_todos()
            return excinfo.value

    error = run(scenario())

    assert "Expected a list" in error.detail
