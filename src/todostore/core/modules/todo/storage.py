"""File storage operations for todos.

Each todo lives in its own file, ``<data_path>/<id>.txt``. The directory
listing is the only index, so anything that does not look like a todo file
is ignored by readers.
"""

import os
import re
import tempfile
from pathlib import Path

from todostore.core.modules.counter.models import ID_WIDTH
from todostore.core.modules.todo.models import Todo

TODO_FILE_EXTENSION = ".txt"

TODO_ID_RE = re.compile(rf"[0-9]{{{ID_WIDTH},}}")


def is_todo_id(value: str) -> bool:
    return bool(TODO_ID_RE.fullmatch(value))


def is_todo_filename(filename: str) -> bool:
    """Check whether a directory entry name is a todo file (e.g. ``00042.txt``)."""
    stem, ext = os.path.splitext(filename)
    return ext == TODO_FILE_EXTENSION and is_todo_id(stem)


def get_todo_file_path(data_path: str, todo_id: str) -> Path:
    """Get path to the file holding a todo.

    Args:
        data_path: Base directory for todo files
        todo_id: Zero-padded todo id

    Returns:
        Path to the todo file (which may not exist)
    """
    return Path(data_path) / f"{todo_id}{TODO_FILE_EXTENSION}"


def write_new_todo_file(data_path: str, todo: Todo) -> Path:
    """Write a todo to a file that must not exist yet.

    Args:
        data_path: Base directory for todo files
        todo: Todo to store

    Returns:
        Path to the written file

    Raises:
        FileExistsError: If a file for this id already exists
    """
    file_path = get_todo_file_path(data_path, todo.id)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("x", encoding="utf-8") as f:
        f.write(todo.to_file())
    return file_path


def replace_todo_file(data_path: str, todo: Todo) -> Path:
    """Overwrite a todo file atomically.

    Content goes to a temporary sibling unique to this call (``00001.txt.<random>.tmp``)
    and is then renamed over the target, so readers see either the old or the
    new content and concurrent updates of one todo never share a temp file.

    Args:
        data_path: Base directory for todo files
        todo: Todo with updated content

    Returns:
        Path to the written file
    """
    file_path = get_todo_file_path(data_path, todo.id)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=file_path.parent, prefix=f"{file_path.name}.", suffix=".tmp", delete=False
    ) as f:
        tmp_path = Path(f.name)
        try:
            f.write(todo.to_file())
            f.flush()
            os.fsync(f.fileno())
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        tmp_path.replace(file_path)
    finally:
        tmp_path.unlink(missing_ok=True)
    return file_path


def read_todo_file(data_path: str, todo_id: str) -> str:
    """Read raw content of a todo file.

    Raises:
        FileNotFoundError: If the todo file doesn't exist
    """
    return get_todo_file_path(data_path, todo_id).read_text(encoding="utf-8")


def remove_todo_file(data_path: str, todo_id: str) -> None:
    """Delete a todo file.

    Raises:
        FileNotFoundError: If the todo file doesn't exist
    """
    get_todo_file_path(data_path, todo_id).unlink()


def list_todo_ids(data_path: str) -> list[str]:
    """List ids of all todo files in ascending order.

    This is a full directory scan, O(n) in the number of entries. A missing
    directory is treated as empty.
    """
    try:
        with os.scandir(data_path) as entries:
            names = [entry.name for entry in entries if entry.is_file() and is_todo_filename(entry.name)]
    except FileNotFoundError:
        return []
    # Ids are zero-padded, so sort by length first to keep ids past the padding width in order
    return sorted((os.path.splitext(name)[0] for name in names), key=lambda todo_id: (len(todo_id), todo_id))
