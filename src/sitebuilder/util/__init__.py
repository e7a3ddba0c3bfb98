"""
Shared utility helpers for filesystem access.
"""

from .filesystem import ensure_directory, file_lock, is_relative_to, remove_tree, write_text_file

__all__ = [
    "ensure_directory",
    "file_lock",
    "is_relative_to",
    "remove_tree",
    "write_text_file",
]
