"""
Remote Store client

Async HTTP access to the todo API served by todosync.web.
"""

from todosync.core.errors import RemoteStoreError, NotFoundError
from .api import TodoApiClient

__all__ = ['TodoApiClient', 'RemoteStoreError', 'NotFoundError']
