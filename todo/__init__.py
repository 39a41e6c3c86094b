"""Single-user task tracker backed by a JSON file."""

from .models import Task
from .store import TaskStore

__all__ = ["Task", "TaskStore"]
