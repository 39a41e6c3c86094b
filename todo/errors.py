class TodoError(Exception):
    """Base exception for todo errors."""

    pass


class StorageError(TodoError):
    """Raised when the tasks file cannot be read or written."""

    pass


class DataFormatError(TodoError):
    """Raised when the tasks file does not hold a valid task list."""

    pass
