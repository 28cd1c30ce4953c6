"""
Todo data model shared by the client, the cache and the server.
Wire format uses camelCase keys (id, title, description, isDone, createdAt).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Filter(Enum):
    """Which subset of the list is displayed"""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value) -> Optional['Filter']:
        """
        Resolve a filter from a Filter or its string value

        Args:
            value: Filter member or string such as 'active'

        Returns:
            Matching Filter, or None if the value is not a known filter
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None

    def matches(self, todo: 'Todo') -> bool:
        if self is Filter.ACTIVE:
            return not todo.is_done
        if self is Filter.COMPLETED:
            return todo.is_done
        return True


@dataclass(frozen=True)
class Todo:
    """A single todo record as returned by the Remote Store"""
    id: int
    title: str
    is_done: bool = False
    description: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Todo':
        """
        Build a Todo from its wire representation

        Args:
            data: Dictionary with at least 'id' and 'title'

        Returns:
            Todo instance

        Raises:
            ValueError: If the payload is not a todo record
        """
        if not isinstance(data, dict) or 'id' not in data or 'title' not in data:
            raise ValueError(f"Invalid todo payload: {data!r}")

        return cls(
            id=int(data['id']),
            title=str(data['title']),
            is_done=bool(data.get('isDone', False)),
            description=data.get('description'),
            created_at=data.get('createdAt'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation of this todo"""
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'isDone': self.is_done,
        }
        if self.created_at is not None:
            data['createdAt'] = self.created_at
        return data


@dataclass(frozen=True)
class TodoPatch:
    """
    Partial update of a todo.

    A field left as None is absent from the request; any other value,
    including is_done=False, is sent.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    is_done: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = {}
        if self.title is not None:
            payload['title'] = self.title
        if self.description is not None:
            payload['description'] = self.description
        if self.is_done is not None:
            payload['isDone'] = self.is_done
        return payload
