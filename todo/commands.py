"""Command handlers: one load/mutate/save cycle per command.

Handlers never print or exit. Each returns an Outcome that the CLI reports.
"""

from dataclasses import dataclass, field
from enum import Enum

from todo import operations
from todo.errors import TodoError
from todo.format import HELP_TEXT, format_task_list
from todo.models import Task
from todo.store import TaskStore

CONFIRM_PROMPT = "Are you sure you want to clear all tasks? (yes/no)"
CONFIRM_TOKEN = "yes"
FIRST_RUN_NOTICE = "No existing tasks file found. Creating a new one."


class OutcomeStatus(str, Enum):
    OK = "ok"
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"


@dataclass
class Outcome:
    status: OutcomeStatus
    message: str
    notices: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (OutcomeStatus.OK, OutcomeStatus.CANCELLED)


def _load_failed(e: TodoError) -> Outcome:
    return Outcome(OutcomeStatus.LOAD_FAILED, f"Error loading tasks: {e}")


def _save_failed(e: TodoError, action: str = "saving") -> Outcome:
    return Outcome(OutcomeStatus.SAVE_FAILED, f"Error {action} tasks: {e}")


def _not_found(task_id: int) -> Outcome:
    return Outcome(OutcomeStatus.NOT_FOUND, f"Error: Task #{task_id} not found.")


def add(store: TaskStore, description: str) -> Outcome:
    notices = []
    if not store.exists():
        notices.append(FIRST_RUN_NOTICE)
    try:
        tasks = store.load()
    except TodoError as e:
        return _load_failed(e)

    task = Task(id=operations.next_id(tasks), description=description)
    tasks.append(task)

    try:
        store.save(tasks)
    except TodoError as e:
        outcome = _save_failed(e)
        outcome.notices = notices
        return outcome
    return Outcome(OutcomeStatus.OK, f"Task #{task.id} added.", notices)


def list_tasks(store: TaskStore) -> Outcome:
    try:
        tasks = store.load()
    except TodoError as e:
        return _load_failed(e)
    return Outcome(OutcomeStatus.OK, format_task_list(tasks))


def complete(store: TaskStore, task_id: int) -> Outcome:
    try:
        tasks = store.load()
    except TodoError as e:
        return _load_failed(e)

    if not operations.set_completed(tasks, task_id):
        return _not_found(task_id)

    try:
        store.save(tasks)
    except TodoError as e:
        return _save_failed(e)
    return Outcome(OutcomeStatus.OK, f"Task #{task_id} marked as complete.")


def remove(store: TaskStore, task_id: int) -> Outcome:
    try:
        tasks = store.load()
    except TodoError as e:
        return _load_failed(e)

    if not operations.remove_by_id(tasks, task_id):
        return _not_found(task_id)

    try:
        store.save(tasks)
    except TodoError as e:
        return _save_failed(e)
    return Outcome(OutcomeStatus.OK, f"Task #{task_id} removed.")


def is_confirmed(answer: str | None) -> bool:
    return answer is not None and answer.strip().lower() == CONFIRM_TOKEN


def clear(store: TaskStore, answer: str | None) -> Outcome:
    """Wipe every task if the answer confirms. Does not read the file first."""
    if not is_confirmed(answer):
        return Outcome(OutcomeStatus.CANCELLED, "Operation cancelled.")
    try:
        store.save([])
    except TodoError as e:
        return _save_failed(e, action="clearing")
    return Outcome(OutcomeStatus.OK, "All tasks cleared.")


def show_help() -> Outcome:
    return Outcome(OutcomeStatus.OK, HELP_TEXT)
