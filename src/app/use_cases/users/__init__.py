"""
User Use Cases
"""

from .load_context_use_case import DashboardContext, LoadContextUseCase

__all__ = [
    "LoadContextUseCase",
    "DashboardContext",
]
