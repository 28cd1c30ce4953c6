"""
Core of the todo client.

Provides:
- RemoteStoreError, NotFoundError: Remote Store failures
- Todo, TodoPatch, Filter: data model
- TodoView, build_view: derived view computation
- LocalCache: cached snapshot of the last known list
- Notifier: transient user-visible messages
- TodoSynchronizer: optimistic state synchronization with the Remote Store
"""

from .errors import RemoteStoreError, NotFoundError
from .models import Todo, TodoPatch, Filter
from .view import TodoView, build_view
from .cache import LocalCache
from .notifier import Notifier, Toast
from .synchronizer import TodoSynchronizer, TodoState

__all__ = [
    'RemoteStoreError', 'NotFoundError',
    'Todo', 'TodoPatch', 'Filter',
    'TodoView', 'build_view',
    'LocalCache',
    'Notifier', 'Toast',
    'TodoSynchronizer', 'TodoState',
]
