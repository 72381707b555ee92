#!/usr/bin/env python3
"""
todo-list

Personal task tracker for the terminal:
1. Adds short text tasks to a per-user JSON file
2. Lists all, completed or pending tasks
3. Marks tasks complete
4. Deletes single tasks or clears the whole list

Each invocation loads the file, performs at most one mutation, rewrites
the file in full and exits.
"""

import sys
import argparse
import yaml
import logging
from pathlib import Path
from typing import Dict, List, Any, Optional, Union
from datetime import datetime
from dataclasses import dataclass, asdict

from todo_errors import TodoError, UsageError, ConfigError, TaskNotFoundError
from storage import JsonTaskFile, DEFAULT_DATA_FILE

DEFAULT_CONFIG_PATH = Path('~/.config/todo-list/config.yaml')

DEFAULT_CONFIG: Dict[str, Any] = {
    'data_file': str(DEFAULT_DATA_FILE),
    'logging': {
        'level': 'WARNING',
    },
}


@dataclass
class Task:
    """One to-do entry"""
    id: int
    description: str
    completed: bool = False
    created_at: str = ''  # ISO-8601 local time with offset

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """
        Build a Task from a stored record

        Unknown keys are ignored; wrong or missing fields raise ValueError.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Task record must be an object, got {type(data).__name__}")

        try:
            task_id = data['id']
            description = data['description']
            completed = data['completed']
            created_at = data['created_at']
        except KeyError as e:
            raise ValueError(f"Task record missing field: {e.args[0]}") from e

        # bool is an int subclass
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 0:
            raise ValueError(f"Invalid task id: {task_id!r}")
        if not isinstance(description, str):
            raise ValueError(f"Invalid description for task {task_id}")
        if not isinstance(completed, bool):
            raise ValueError(f"Invalid completed flag for task {task_id}")
        if not isinstance(created_at, str):
            raise ValueError(f"Invalid created_at for task {task_id}")

        return cls(
            id=task_id,
            description=description,
            completed=completed,
            created_at=created_at,
        )


def now_timestamp() -> str:
    """Current local time as ISO-8601 with UTC offset"""
    return datetime.now().astimezone().isoformat()


class TodoList:
    """
    Task store backed by a single JSON file

    The in-memory list mirrors the file after every successful operation.
    Each mutation rewrites the whole file.
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        Load tasks from file_path

        Args:
            file_path: Path of the task file (~ is expanded)
        """
        self.logger = logging.getLogger("TodoList")
        self.storage = JsonTaskFile(file_path)
        self.file_path = self.storage.path
        self.tasks: List[Task] = self._load_tasks()

    def _load_tasks(self) -> List[Task]:
        """
        Load tasks, treating a corrupt file as an empty list

        A missing file, invalid JSON or a single malformed record all yield
        an empty list. Nothing is reported to the user, and the old contents
        are lost on the next write. Hand edits that break the structure
        therefore discard every task.
        """
        records = self.storage.read()

        try:
            tasks = [Task.from_dict(record) for record in records]
        except ValueError as e:
            self.logger.info(f"Discarding corrupt task file {self.file_path}: {e}")
            return []

        self.logger.debug(f"Loaded {len(tasks)} tasks from {self.file_path}")
        return tasks

    def save(self) -> None:
        """
        Persist all tasks

        Raises:
            PersistenceError: if the file cannot be written (memory is not rolled back)
        """
        self.storage.write([task.to_dict() for task in self.tasks])

    def next_id(self) -> int:
        """One more than the highest current id, or 1 for an empty list"""
        return max((task.id for task in self.tasks), default=0) + 1

    # ==================== Operations ====================

    def add(self, description: str) -> Task:
        """
        Append a new pending task and persist

        Args:
            description: Task text (not validated)

        Returns:
            The created Task
        """
        task = Task(
            id=self.next_id(),
            description=description,
            completed=False,
            created_at=now_timestamp(),
        )
        self.tasks.append(task)
        self.save()

        self.logger.info(f"Added task {task.id}")
        return task

    def list_tasks(self, show_completed: bool = False, show_pending: bool = False) -> List[Task]:
        """
        Filtered view of the tasks in insertion order

        show_completed wins when both flags are set; neither flag means all tasks.
        """
        if show_completed:
            return [task for task in self.tasks if task.completed]
        if show_pending:
            return [task for task in self.tasks if not task.completed]
        return list(self.tasks)

    def find(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def complete(self, task_id: int) -> bool:
        """
        Mark a task complete

        Returns:
            True if the task was pending and is now completed,
            False if it was already completed (nothing is written)

        Raises:
            TaskNotFoundError: if no task has task_id
        """
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        if task.completed:
            self.logger.debug(f"Task {task_id} already completed")
            return False

        task.completed = True
        self.save()

        self.logger.info(f"Completed task {task_id}")
        return True

    def delete(self, task_id: int) -> Task:
        """
        Remove a task, keeping the order of the rest

        Raises:
            TaskNotFoundError: if no task has task_id (nothing is written)
        """
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.save()

        self.logger.info(f"Deleted task {task_id}")
        return task

    def clear(self, confirmed: bool = False) -> Optional[int]:
        """
        Remove every task

        Returns:
            Number of tasks removed, or None when not confirmed (nothing changes)
        """
        if not confirmed:
            return None

        count = len(self.tasks)
        self.tasks = []
        self.save()

        self.logger.info(f"Cleared {count} tasks")
        return count


# ==================== Configuration & Logging ====================

def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML, layered over the defaults

    Args:
        config_path: Explicit config file; must exist when given.
                     Without it the default path is used if present.

    Raises:
        ConfigError: missing explicit file, invalid YAML or bad values
    """
    config = {
        'data_file': DEFAULT_CONFIG['data_file'],
        'logging': dict(DEFAULT_CONFIG['logging']),
    }

    if config_path is None:
        path = DEFAULT_CONFIG_PATH.expanduser()
        if not path.exists():
            return config
    else:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if loaded is None:
        return config
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    if loaded.get('data_file') is not None:
        config['data_file'] = str(loaded['data_file'])

    logging_section = loaded.get('logging') or {}
    if not isinstance(logging_section, dict):
        raise ConfigError(f"'logging' in {path} must be a mapping")
    if 'level' in logging_section:
        level = str(logging_section['level']).upper()
        if not isinstance(getattr(logging, level, None), int):
            raise ConfigError(f"Unknown log level in {path}: {logging_section['level']}")
        config['logging']['level'] = level

    return config


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Setup the TodoList logger (handler installed once)"""
    logger = logging.getLogger("TodoList")

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - TodoList - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# ==================== CLI Interface ====================

class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting"""

    def error(self, message):
        raise UsageError(f"{self.format_usage().rstrip()}\n{self.prog}: error: {message}")


def task_id_arg(value: str) -> int:
    """argparse type for task ids: non-negative integers"""
    try:
        task_id = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid task id: {value!r}")
    if task_id < 0:
        raise argparse.ArgumentTypeError(f"task id must be non-negative: {value}")
    return task_id


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='todo-list',
        description="A simple CLI to-do list application"
    )
    parser.add_argument(
        '--config',
        help=f'Path to YAML config file (default: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--data-file',
        help=f'Path to the task file (default: {DEFAULT_DATA_FILE})'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='command')
    subparsers.required = True

    add_parser = subparsers.add_parser('add', help='Add a new task to the to-do list')
    add_parser.add_argument('description', help='The task description')

    list_parser = subparsers.add_parser('list', help='List all tasks')
    list_parser.add_argument(
        '-c', '--completed',
        action='store_true',
        help='Show only completed tasks'
    )
    list_parser.add_argument(
        '-p', '--pending',
        action='store_true',
        help='Show only pending tasks'
    )

    complete_parser = subparsers.add_parser('complete', help='Mark a task as complete')
    complete_parser.add_argument('id', type=task_id_arg, help='The ID of the task to complete')

    delete_parser = subparsers.add_parser('delete', help='Delete a task')
    delete_parser.add_argument('id', type=task_id_arg, help='The ID of the task to delete')

    clear_parser = subparsers.add_parser('clear', help='Clear all tasks')
    clear_parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Confirm clearing all tasks'
    )

    return parser


def format_task(task: Task) -> str:
    """Render one list line: checkbox, status mark, id and description"""
    checkbox = '[x]' if task.completed else '[ ]'
    status = '✓' if task.completed else ' '
    return f"{checkbox} {status} {task.id} - {task.description}"


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    parser = build_parser()

    # Usage errors are reported before config or the task file are touched
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return e.exit_code

    try:
        config = load_config(args.config)
        setup_logging('DEBUG' if args.verbose else config['logging']['level'])

        todo_list = TodoList(args.data_file or config['data_file'])

        if args.command == 'add':
            todo_list.add(args.description)
            print("✓ Task added successfully!")

        elif args.command == 'list':
            tasks = todo_list.list_tasks(
                show_completed=args.completed,
                show_pending=args.pending,
            )
            if not tasks:
                print("No tasks found.")
            else:
                print("\n📋 Your To-Do List:\n")
                for task in tasks:
                    print(format_task(task))
                print()

        elif args.command == 'complete':
            if todo_list.complete(args.id):
                print(f"✓ Task {args.id} marked as complete!")
            else:
                print(f"Task {args.id} is already completed.")

        elif args.command == 'delete':
            todo_list.delete(args.id)
            print(f"✓ Task {args.id} deleted successfully!")

        elif args.command == 'clear':
            count = todo_list.clear(confirmed=args.yes)
            if count is None:
                print("⚠️  This will delete all tasks. Use --yes to confirm.")
            else:
                print(f"✓ Cleared {count} task(s).")

    except TaskNotFoundError as e:
        print(e)
        return e.exit_code
    except TodoError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return e.exit_code

    return 0


if __name__ == '__main__':
    sys.exit(main())
