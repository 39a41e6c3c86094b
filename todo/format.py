"""Task formatting for CLI display."""

from todo.models import Task

EMPTY_MESSAGE = "No tasks found. Add one with 'add <description>'."
LIST_HEADER = "--- Your To-Do List ---"
LIST_FOOTER = "-" * 23

HELP_TEXT = """Usage: todo <command> [arguments]

Commands:
  add <description>     Add a new task.
  list                  List all tasks.
  complete <id>         Mark a task as completed by its ID.
  remove <id>           Remove a task by its ID.
  clear                 Clear all tasks.
  help                  Show this help message.

Examples:
  todo add "Buy groceries"
  todo list
  todo complete 1
  todo remove 2
  todo clear"""


def format_task(task: Task) -> str:
    status = "[X]" if task.completed else "[ ]"
    return f"{status} {task.id}. {task.description}"


def format_task_list(tasks: list[Task]) -> str:
    """Format tasks for display, one checkbox line per task in list order."""
    if not tasks:
        return EMPTY_MESSAGE

    lines = [LIST_HEADER]
    lines.extend(format_task(task) for task in tasks)
    lines.append(LIST_FOOTER)
    return "\n".join(lines)
