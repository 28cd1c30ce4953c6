"""
In-memory todo store backing the REST API.
Data lives only as long as the server process.
"""

import datetime
import logging
import threading
from typing import Any, Dict, List, Optional

SEED_TODOS = [
    {
        'title': 'Study Flask',
        'description': 'Read the official docs and follow the tutorial.',
        'isDone': False,
    },
    {
        'title': 'Review asyncio',
        'description': 'Go over tasks, gather and event loop basics.',
        'isDone': True,
    },
]


class TodoNotFound(Exception):
    """No todo exists with the requested id"""

    def __init__(self, todo_id: int):
        super().__init__(f"Todo with ID {todo_id} not found")
        self.todo_id = todo_id


class TodoStore:
    """Thread-safe list of todo records with server-assigned ids"""

    def __init__(self, seed: bool = False):
        """
        Initialize store

        Args:
            seed: Start with a couple of sample todos
        """
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._todos: List[Dict[str, Any]] = []
        self._id_counter = 0

        if seed:
            for item in SEED_TODOS:
                todo = self.create(item['title'], item['description'])
                if item['isDone']:
                    self.update(todo['id'], {'isDone': True})

    def _find(self, todo_id: int) -> Dict[str, Any]:
        for todo in self._todos:
            if todo['id'] == todo_id:
                return todo
        raise TodoNotFound(todo_id)

    def find_all(self) -> List[Dict[str, Any]]:
        """All todos in insertion order"""
        with self._lock:
            return [dict(todo) for todo in self._todos]

    def find_one(self, todo_id: int) -> Dict[str, Any]:
        """
        Get a todo by id

        Raises:
            TodoNotFound: If the id is unknown
        """
        with self._lock:
            return dict(self._find(todo_id))

    def create(self, title: str, description: Optional[str] = None) -> Dict[str, Any]:
        """
        Add a new todo

        Args:
            title: Todo title
            description: Optional description

        Returns:
            The created todo
        """
        with self._lock:
            self._id_counter += 1
            todo = {
                'id': self._id_counter,
                'title': title,
                'description': description or None,
                'isDone': False,
                'createdAt': datetime.datetime.now().isoformat(),
            }
            self._todos.append(todo)
        self.logger.info(f"Created todo {todo['id']}: {title}")
        return dict(todo)

    def update(self, todo_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply the given fields to a todo

        Args:
            todo_id: Todo id
            changes: Validated subset of title, description, isDone

        Returns:
            The updated todo

        Raises:
            TodoNotFound: If the id is unknown
        """
        with self._lock:
            todo = self._find(todo_id)
            todo.update(changes)
            result = dict(todo)
        self.logger.info(f"Updated todo {todo_id}: {changes}")
        return result

    def remove(self, todo_id: int) -> None:
        """
        Delete a todo

        Raises:
            TodoNotFound: If the id is unknown
        """
        with self._lock:
            todo = self._find(todo_id)
            self._todos.remove(todo)
        self.logger.info(f"Deleted todo {todo_id}")
