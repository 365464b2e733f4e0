"""
Utilities module - Logging and file-system helpers.
"""

from rectospec.utils.logging import setup_logging, get_logger
from rectospec.utils.file_system import (
    read_text_file,
    read_json_file,
    write_text_file,
    file_exists,
    resolve_output_path,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "read_text_file",
    "read_json_file",
    "write_text_file",
    "file_exists",
    "resolve_output_path",
]
