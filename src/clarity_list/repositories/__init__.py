"""Persistence layer for Clarity List."""

from .task_store import TaskStore, default_storage_path

__all__ = ["TaskStore", "default_storage_path"]
