"""
Async client for the todo Remote Store.

Every failure (non-2xx status, timeout, connection error, undecodable
body) is raised as RemoteStoreError carrying a message that can be shown
to the user.
"""

import asyncio
import logging
from typing import Any, List, Optional

import aiohttp

from todosync.core.errors import NotFoundError, RemoteStoreError
from todosync.core.models import Todo, TodoPatch

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 10.0


class TodoApiClient:
    """
    aiohttp client for the /todos resource
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL,
                 session: Optional[aiohttp.ClientSession] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize client

        Args:
            base_url: Server root, e.g. http://localhost:3000
            session: Existing session to borrow; one is created on demand if omitted
            timeout: Total timeout per request in seconds
        """
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> 'TodoApiClient':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the session if this client created it"""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def _request(self, method: str, path: str, failure: str,
                       payload: Optional[dict] = None) -> Any:
        """
        Send a request and decode the JSON answer

        Args:
            method: HTTP method
            path: Path below base_url
            failure: User-facing message used if the request fails
            payload: Optional JSON body

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            NotFoundError: On HTTP 404
            RemoteStoreError: On any other failure
        """
        url = f"{self.base_url}{path}"
        session = self._get_session()
        try:
            async with session.request(method, url, json=payload, timeout=self.timeout) as resp:
                if resp.status == 404:
                    body = await resp.text()
                    raise NotFoundError(failure, status=resp.status, detail=body[:200])
                if resp.status >= 300:
                    body = await resp.text()
                    raise RemoteStoreError(failure, status=resp.status, detail=body[:200])
                if resp.status == 204:
                    return None

                text = await resp.text()
                if not text.strip():
                    return None
                ctype = resp.headers.get('Content-Type', '')
                if 'json' not in ctype:
                    return {'text': text[:2000]}
                return await resp.json()
        except asyncio.TimeoutError as e:
            raise RemoteStoreError(failure, detail=f"Timeout calling {method} {url}") from e
        except aiohttp.ClientError as e:
            raise RemoteStoreError(failure, detail=f"Client error calling {method} {url}: {e}") from e
        except ValueError as e:
            raise RemoteStoreError(failure, detail=f"Invalid response from {method} {url}: {e}") from e

    def _decode_todo(self, data: Any, failure: str) -> Todo:
        try:
            return Todo.from_dict(data)
        except (TypeError, ValueError) as e:
            raise RemoteStoreError(failure, detail=str(e)) from e

    async def fetch_todos(self) -> List[Todo]:
        """Fetch the full todo list"""
        failure = "Could not load todos from the server."
        data = await self._request('GET', '/todos', failure)
        if not isinstance(data, list):
            raise RemoteStoreError(failure, detail=f"Expected a list, got {type(data).__name__}")

        todos = [self._decode_todo(item, failure) for item in data]
        self.logger.debug(f"Fetched {len(todos)} todos")
        return todos

    async def get_todo(self, todo_id: int) -> Todo:
        """Fetch a single todo by id"""
        failure = f"Could not load todo {todo_id}."
        data = await self._request('GET', f'/todos/{todo_id}', failure)
        return self._decode_todo(data, failure)

    async def create_todo(self, title: str, description: Optional[str] = None) -> Todo:
        """
        Create a todo

        Args:
            title: Todo title
            description: Optional description

        Returns:
            Created todo with its server-assigned id
        """
        failure = "Could not add the todo."
        payload = {'title': title}
        if description is not None:
            payload['description'] = description

        data = await self._request('POST', '/todos', failure, payload)
        todo = self._decode_todo(data, failure)
        self.logger.info(f"Created todo {todo.id}: {todo.title}")
        return todo

    async def update_todo(self, todo_id: int, patch: TodoPatch) -> Todo:
        """
        Apply a partial update

        Args:
            todo_id: Todo id
            patch: Fields to change

        Returns:
            Updated todo as stored on the server
        """
        failure = "Could not update the todo."
        data = await self._request('PATCH', f'/todos/{todo_id}', failure, patch.to_payload())
        return self._decode_todo(data, failure)

    async def delete_todo(self, todo_id: int) -> None:
        """Delete a todo"""
        await self._request('DELETE', f'/todos/{todo_id}', "Could not delete the todo.")
        self.logger.info(f"Deleted todo {todo_id}")
