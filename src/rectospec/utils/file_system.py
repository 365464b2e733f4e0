"""
File-system helpers.

Every failure is reported as FilesystemError so that callers can tell
I/O problems apart from validation or configuration errors.
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

from rectospec.exceptions import FilesystemError

PathLike = Union[str, Path]


def read_text_file(path: PathLike) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        FilesystemError: If the file is missing or unreadable
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FilesystemError(f"File not found: {path}", path=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(f"Failed to read file: {e}", path=str(path)) from e


def read_json_file(path: PathLike) -> Any:
    """
    Read and decode a JSON file.

    Raises:
        FilesystemError: If the file is missing, unreadable or not JSON
    """
    content = read_text_file(path)
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise FilesystemError(f"Failed to parse JSON in {path}: {e}", path=str(path)) from e


def write_text_file(path: PathLike, content: str) -> None:
    """
    Write a UTF-8 text file, creating parent directories as needed.

    Raises:
        FilesystemError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"Failed to write file: {e}", path=str(path)) from e


def file_exists(path: PathLike) -> bool:
    """Check whether a path exists."""
    try:
        return Path(path).exists()
    except OSError:
        return False


def resolve_output_path(
    input_path: PathLike,
    output_path: Optional[PathLike],
    new_suffix: str,
) -> Path:
    """
    Work out where to write a generated file.

    Args:
        input_path: The source file (e.g. recording.json)
        output_path: Explicit output path, if the user gave one
        new_suffix: Suffix to use beside the input (e.g. ".feature")

    Returns:
        Absolute output path when given, else the input path with its
        suffix replaced
    """
    if output_path:
        return Path(output_path).resolve()
    return Path(input_path).with_suffix(new_suffix)


def resolve_within(base_dir: PathLike, relative_path: PathLike) -> Path:
    """
    Resolve a path that must stay inside ``base_dir``.

    Args:
        base_dir: Directory the result has to live under
        relative_path: Path to place under it (e.g. a generated filename)

    Returns:
        Absolute path under ``base_dir``

    Raises:
        FilesystemError: If the path is absolute, climbs out with ``..``
            or names ``base_dir`` itself
    """
    base = Path(base_dir).resolve()
    path = (base / relative_path).resolve()
    if path == base or not path.is_relative_to(base):
        raise FilesystemError(
            f"Refusing to write outside {base}: {relative_path}", path=str(relative_path)
        )
    return path
