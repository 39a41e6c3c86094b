"""JSON file store for the task list.

The whole list is read on load and rewritten on save. Saves go through a
temporary file in the same directory followed by os.replace, so a reader never
sees a half-written file.
"""

import json
import logging
import os
import tempfile
from dataclasses import asdict
from pathlib import Path
from typing import Any

from todo.errors import DataFormatError, StorageError
from todo.models import Task

logger = logging.getLogger(__name__)


def _task_from_entry(entry: Any, index: int) -> Task:
    if not isinstance(entry, dict):
        raise DataFormatError(f"entry {index} is not an object")

    task_id = entry.get("id")
    # bool is a subclass of int
    if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 0:
        raise DataFormatError(f"entry {index} has invalid 'id': {task_id!r}")

    description = entry.get("description")
    if not isinstance(description, str):
        raise DataFormatError(f"entry {index} has invalid 'description': {description!r}")

    completed = entry.get("completed")
    if not isinstance(completed, bool):
        raise DataFormatError(f"entry {index} has invalid 'completed': {completed!r}")

    return Task(id=task_id, description=description, completed=completed)


def decode(text: str) -> list[Task]:
    """Parse file content into tasks. Raises DataFormatError on bad structure."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataFormatError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise DataFormatError(f"expected a list of tasks, got {type(data).__name__}")
    return [_task_from_entry(entry, i) for i, entry in enumerate(data)]


def encode(tasks: list[Task]) -> str:
    return json.dumps([asdict(task) for task in tasks], indent=2, ensure_ascii=False) + "\n"


class TaskStore:
    """Loads and saves the full task list at a single path."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> list[Task]:
        """Read every task from disk. A missing file is an empty list."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No tasks file at {self.path}")
            return []
        except UnicodeDecodeError as e:
            logger.warning(f"Tasks file {self.path} is not UTF-8: {e}")
            raise DataFormatError(f"{self.path} is not valid UTF-8") from e
        except OSError as e:
            logger.warning(f"Failed to read {self.path}: {e}")
            raise StorageError(str(e)) from e

        try:
            tasks = decode(text)
        except DataFormatError as e:
            logger.warning(f"Malformed tasks file {self.path}: {e}")
            raise

        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    def save(self, tasks: list[Task]) -> None:
        """Replace the file with the given tasks.

        The temp file is removed on any failure; the previous file is left as it was.
        """
        try:
            payload = encode(tasks).encode("utf-8")
        except UnicodeEncodeError as e:
            logger.warning(f"Refusing to save tasks that are not valid UTF-8: {e}")
            raise DataFormatError(f"task text is not valid UTF-8: {e.reason}") from e

        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.warning(f"Failed to save {self.path}: {e}")
            raise StorageError(str(e)) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")
