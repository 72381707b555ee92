"""
JSON task file

Reads and rewrites the per-user task file. The file is always written in
full; there is no append mode and no temp-file swap, so a crash mid-write
can truncate it.
"""

import json
import logging
from pathlib import Path
from typing import List, Dict, Any, Union

from todo_errors import PersistenceError

DEFAULT_DATA_FILE = Path('~/.todo-list.json')


class JsonTaskFile:
    """Pretty-printed JSON array of task records"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.logger = logging.getLogger("TodoList.Storage")

    def read(self) -> List[Dict[str, Any]]:
        """
        Read raw task records from disk

        Returns:
            List of task dictionaries, or an empty list when the file is
            missing, unreadable or does not hold a JSON array
        """
        if not self.path.exists():
            self.logger.debug(f"Task file not found: {self.path}")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        # ValueError covers JSONDecodeError and UnicodeDecodeError;
        # deeply nested arrays exhaust the decoder's recursion limit
        except (ValueError, RecursionError) as e:
            self.logger.info(f"Task file is not valid JSON, starting empty: {e}")
            return []
        except OSError as e:
            self.logger.info(f"Task file unreadable, starting empty: {e}")
            return []

        if not isinstance(records, list):
            self.logger.info(
                f"Task file holds {type(records).__name__}, not a list; starting empty"
            )
            return []

        self.logger.debug(f"Loaded {len(records)} records from {self.path}")
        return records

    def write(self, records: List[Dict[str, Any]]) -> None:
        """
        Overwrite the task file with the given records

        Raises:
            PersistenceError: if the file or its directory cannot be written
        """
        content = json.dumps(records, indent=2, ensure_ascii=False) + '\n'

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e

        self.logger.debug(f"Wrote {len(records)} records to {self.path}")
