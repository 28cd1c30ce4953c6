"""
todosync - a small todo list with an optimistic client synchronizer.

Packages:
- core: data model, derived view, local cache, notifier and the synchronizer
- client: async HTTP client for the todo Remote Store
- web: Flask Remote Store server
- ui: terminal front end
"""

__version__ = "0.1.0"
