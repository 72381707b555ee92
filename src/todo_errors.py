"""
Error taxonomy for todo-list

Every error the CLI reports is a TodoError subclass; main() maps each one
to its exit_code instead of using a single catch-all.
"""


class TodoError(Exception):
    """Base class for all todo-list errors"""
    exit_code = 1


class UsageError(TodoError):
    """Malformed command-line arguments"""
    exit_code = 2


class ConfigError(TodoError):
    """Missing or unparsable configuration file"""
    exit_code = 1


class PersistenceError(TodoError):
    """The task file could not be written"""
    exit_code = 1


class TaskNotFoundError(TodoError):
    """No task with the requested id (reported, not fatal)"""
    exit_code = 0

    def __init__(self, task_id: int):
        super().__init__(f"Task with ID {task_id} not found.")
        self.task_id = task_id
