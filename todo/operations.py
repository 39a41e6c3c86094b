"""Task list operations: pure functions over an in-memory task list."""

from todo.models import Task


def next_id(tasks: list[Task]) -> int:
    return max((task.id for task in tasks), default=0) + 1


def find_by_id(tasks: list[Task], task_id: int) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def set_completed(tasks: list[Task], task_id: int) -> bool:
    """Mark the first task with this id as completed. Returns False if absent."""
    task = find_by_id(tasks, task_id)
    if task is None:
        return False
    task.completed = True
    return True


def remove_by_id(tasks: list[Task], task_id: int) -> bool:
    """Drop every task with this id, in place. Returns True if any was removed."""
    before = len(tasks)
    tasks[:] = [task for task in tasks if task.id != task_id]
    return len(tasks) < before
