"""
Storage backends for the task list
"""

from .json_file import JsonTaskFile, DEFAULT_DATA_FILE

__all__ = ['JsonTaskFile', 'DEFAULT_DATA_FILE']
