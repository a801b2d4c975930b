"""
Client-side session components: the live todo reconciler and the HTTP client
that feeds it.
"""

from .api_client import TaskApiClient, pop_block_notice
from .reconciler import ITodoStore, TodoReconciler, merge_fields, reduce

__all__ = [
    "ITodoStore",
    "TaskApiClient",
    "TodoReconciler",
    "merge_fields",
    "pop_block_notice",
    "reduce",
]
