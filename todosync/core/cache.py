"""
Local Cache

Keeps the last confirmed todo list in a JSON file under a single key so
the front end can render immediately on startup, before the server answers.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .models import Todo


class LocalCache:
    """Best-effort single-key snapshot store"""

    CACHE_KEY = 'todos'

    def __init__(self, cache_file: str = "todos_cache.json"):
        """
        Initialize LocalCache

        Args:
            cache_file: Path to the snapshot JSON file
        """
        self.cache_file = Path(cache_file).expanduser()
        self.logger = logging.getLogger(__name__)

    def read(self) -> Optional[List[Todo]]:
        """
        Load the cached snapshot

        Returns:
            List of todos, or None if there is no usable snapshot
        """
        try:
            if not self.cache_file.exists():
                return None

            with open(self.cache_file, 'r') as f:
                data = json.load(f)

            if not isinstance(data, dict) or not isinstance(data.get(self.CACHE_KEY), list):
                self.logger.warning(f"Invalid cache format in {self.cache_file}, ignoring")
                return None

            todos = [Todo.from_dict(item) for item in data[self.CACHE_KEY]]
            self.logger.debug(f"Loaded {len(todos)} todos from cache")
            return todos
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to read todo cache: {e}")
            return None

    def write(self, todos: Iterable[Todo]) -> None:
        """
        Replace the cached snapshot

        Args:
            todos: Todos to store
        """
        snapshot = [todo.to_dict() for todo in todos]
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, 'w') as f:
                json.dump({self.CACHE_KEY: snapshot}, f, indent=2)
            self.logger.debug(f"Cached {len(snapshot)} todos")
        except (OSError, TypeError) as e:
            self.logger.error(f"Failed to write todo cache: {e}")

    def clear(self) -> None:
        """Remove the cached snapshot"""
        try:
            self.cache_file.unlink()
            self.logger.info("Todo cache cleared")
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.error(f"Failed to clear todo cache: {e}")
