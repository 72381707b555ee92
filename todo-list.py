#!/usr/bin/env python3
"""
todo-list CLI

Simple personal to-do list kept in ~/.todo-list.json.

Usage:
    ./todo-list.py add "buy milk"          # Add a task
    ./todo-list.py list                    # List all tasks
    ./todo-list.py list --pending          # Only tasks still open
    ./todo-list.py complete 1              # Mark task 1 complete
    ./todo-list.py delete 1                # Delete task 1
    ./todo-list.py clear --yes             # Delete every task

Examples:
    # Keep tasks somewhere else for this run
    ./todo-list.py --data-file /tmp/tasks.json add "try it out"

    # Use a config file
    ./todo-list.py --config config/config.yaml list --completed
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from todo_list import main

if __name__ == '__main__':
    sys.exit(main())
