"""
Todo Synchronizer

Owns the local todo list and the active filter, and mediates every
mutation between front-end events and the Remote Store.

Toggle, delete and clear-completed are optimistic: the local list changes
and is rendered first, then rolled back if the server call fails. Create
and rename wait for the server before changing anything locally.

Local mutation and rendering never await, so on a single event loop no
render observes a half-applied change. The list is replaced, never mutated
in place, which makes any previously held list an immutable snapshot.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional

from .cache import LocalCache
from .errors import RemoteStoreError
from .models import Filter, Todo, TodoPatch
from .notifier import Notifier
from .view import TodoView, build_view


@dataclass
class TodoState:
    """Mutable state owned by one synchronizer"""
    todos: List[Todo] = field(default_factory=list)
    filter: Filter = Filter.ALL
    loading: bool = False

    def find(self, todo_id: int) -> Optional[Todo]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def replace_todo(self, updated: Todo):
        self.todos = [updated if todo.id == updated.id else todo for todo in self.todos]


class TodoSynchronizer:
    """
    Keeps a locally consistent view of the remote todo collection
    """

    CLEAR_COMPLETED_FAILED = "Could not delete the completed todos."

    def __init__(self, api, cache: LocalCache, notifier: Notifier,
                 on_render: Optional[Callable[[TodoView], None]] = None,
                 on_loading: Optional[Callable[[bool], None]] = None,
                 state: Optional[TodoState] = None):
        """
        Initialize synchronizer

        Args:
            api: Remote Store client (see todosync.client.api.TodoApiClient)
            cache: Local snapshot cache
            notifier: User-visible error reporting
            on_render: Called with the derived view after every state change
            on_loading: Called with True/False when the loading state changes
            state: Initial state (a fresh one if omitted)
        """
        self.logger = logging.getLogger(__name__)
        self.api = api
        self.cache = cache
        self.notifier = notifier
        self.on_render = on_render
        self.on_loading = on_loading
        self.state = state or TodoState()

    @property
    def todos(self) -> List[Todo]:
        return list(self.state.todos)

    @property
    def view(self) -> TodoView:
        """Current derived view, without notifying the front end"""
        return build_view(self.state.todos, self.state.filter)

    def render(self) -> TodoView:
        """Recompute the derived view and hand it to the front end"""
        view = self.view
        if self.on_render:
            self.on_render(view)
        return view

    def _set_loading(self, loading: bool):
        self.state.loading = loading
        if self.on_loading:
            self.on_loading(loading)

    def _persist(self):
        self.cache.write(self.state.todos)

    def _fail(self, error: RemoteStoreError, message: Optional[str] = None):
        self.logger.error(f"{error.message} (status={error.status}) {error.detail}")
        self.notifier.notify(message or error.message)

    async def load_initial(self):
        """
        Render the cached snapshot (if any), then replace it with the server list
        """
        cached = self.cache.read()
        if cached is not None:
            self.state.todos = cached
            self.logger.info(f"Rendering {len(cached)} cached todos")
            self.render()
        else:
            self._set_loading(True)

        try:
            fetched = await self.api.fetch_todos()
            self.state.todos = list(fetched)
            self._persist()
            self.logger.info(f"Loaded {len(fetched)} todos from server")
            self.render()
        except RemoteStoreError as e:
            self._fail(e)
            self.render()
        finally:
            self._set_loading(False)

    async def create_todo(self, title: str, description: Optional[str] = None) -> Optional[Todo]:
        """
        Create a todo once the server has assigned its id

        Args:
            title: Title entered by the user
            description: Optional description

        Returns:
            The new todo, or None if nothing was created
        """
        title = (title or '').strip()
        if not title:
            return None

        try:
            created = await self.api.create_todo(title, description)
        except RemoteStoreError as e:
            self._fail(e)
            return None

        self.state.todos = self.state.todos + [created]
        self._persist()
        self.render()
        return created

    async def toggle_status(self, todo_id: int, is_done: bool) -> bool:
        """
        Optimistically set the done flag of a todo

        Args:
            todo_id: Todo id
            is_done: New completion state

        Returns:
            True if the server confirmed the change
        """
        todo = self.state.find(todo_id)
        if todo is None:
            return False

        previous = todo.is_done
        self.state.replace_todo(replace(todo, is_done=is_done))
        self.render()

        try:
            await self.api.update_todo(todo_id, TodoPatch(is_done=is_done))
        except RemoteStoreError as e:
            current = self.state.find(todo_id)
            if current is not None:
                self.state.replace_todo(replace(current, is_done=previous))
            self.render()
            self._fail(e)
            return False

        self._persist()
        return True

    async def rename_todo(self, todo_id: int, title: str) -> bool:
        """
        Rename a todo after the server accepts the new title

        The edit is discarded without a request if the trimmed title is
        empty or unchanged.

        Returns:
            True if the title was changed
        """
        todo = self.state.find(todo_id)
        title = (title or '').strip()
        if todo is None or not title or title == todo.title:
            return False

        try:
            await self.api.update_todo(todo_id, TodoPatch(title=title))
        except RemoteStoreError as e:
            self._fail(e)
            return False

        current = self.state.find(todo_id)
        if current is not None:
            self.state.replace_todo(replace(current, title=title))
        self._persist()
        self.render()
        return True

    async def delete_todo(self, todo_id: int) -> bool:
        """
        Optimistically remove a todo, restoring the whole prior list on failure

        Returns:
            True if the server confirmed the deletion
        """
        if self.state.find(todo_id) is None:
            return False

        snapshot = self.state.todos
        self.state.todos = [todo for todo in snapshot if todo.id != todo_id]
        self.render()

        try:
            await self.api.delete_todo(todo_id)
        except RemoteStoreError as e:
            self.state.todos = snapshot
            self.render()
            self._fail(e)
            return False

        self._persist()
        return True

    async def clear_completed(self, confirm: Optional[Callable[[int], Any]] = None) -> bool:
        """
        Delete every completed todo as one all-or-nothing batch

        Args:
            confirm: Optional callable receiving the number of completed
                todos; returning (or resolving to) False cancels before
                anything changes

        Returns:
            True if every delete succeeded
        """
        completed = [todo for todo in self.state.todos if todo.is_done]
        if not completed:
            return False
        if confirm is not None:
            answer = confirm(len(completed))
            if inspect.isawaitable(answer):
                answer = await answer
            if not answer:
                return False
            # The list may have changed while waiting for the answer
            completed = [todo for todo in self.state.todos if todo.is_done]
            if not completed:
                return False

        snapshot = self.state.todos
        self.state.todos = [todo for todo in snapshot if not todo.is_done]
        self.render()

        results = await asyncio.gather(
            *(self.api.delete_todo(todo.id) for todo in completed),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]

        if failures:
            self.state.todos = snapshot
            self.render()
            unexpected = [f for f in failures if not isinstance(f, RemoteStoreError)]
            if unexpected:
                raise unexpected[0]
            self.logger.error(f"{len(failures)} of {len(completed)} deletes failed, batch rolled back")
            self._fail(failures[0], self.CLEAR_COMPLETED_FAILED)
            return False

        self._persist()
        self.logger.info(f"Cleared {len(completed)} completed todos")
        return True

    def set_filter(self, filter) -> bool:
        """
        Change which todos are displayed; the list itself is untouched

        Args:
            filter: Filter or its string value

        Returns:
            True if the filter was recognised
        """
        parsed = Filter.parse(filter)
        if parsed is None:
            return False

        self.state.filter = parsed
        self.render()
        return True
