from pathlib import Path

import structlog

from todostore.config import Config
from todostore.core.core import Service
from todostore.core.modules.counter.service import CounterService
from todostore.core.modules.todo.models import Todo
from todostore.core.modules.todo.storage import (
    is_todo_id,
    list_todo_ids,
    read_todo_file,
    remove_todo_file,
    replace_todo_file,
    write_new_todo_file,
)
from todostore.errors import CollisionError, CorruptStateError, NotFoundError, StorageIOError
from todostore.utils import now

logger = structlog.get_logger(__name__)


class TodoService(Service):
    """Manages todos stored as one JSON file per id.

    Every call goes to the filesystem, the data directory is the only source of truth.
    """

    def __init__(self, config: Config, counter: CounterService) -> None:
        super().__init__(config)
        self.data_path = config.data_path
        self.counter = counter  # Only create_todo allocates ids

    async def on_start(self) -> None:
        """Create the data directory on startup."""
        try:
            Path(self.data_path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Cannot create data directory {self.data_path}: {e}") from e

    def list_todos(self) -> list[Todo]:
        """Get all todos ordered by id.

        Scans the whole data directory on each call. Entries that are not todo
        files are ignored; todo files that cannot be read or parsed are logged
        and skipped. Only a failure to list the directory fails the call.
        """
        try:
            todo_ids = list_todo_ids(self.data_path)
        except OSError as e:
            raise StorageIOError(f"Cannot list data directory {self.data_path}: {e}") from e

        todos: list[Todo] = []
        for todo_id in todo_ids:
            try:
                todos.append(self.get_todo(todo_id))
            except NotFoundError:
                # Deleted between the scan and the read
                continue
            except (CorruptStateError, StorageIOError) as e:
                logger.warning("skipping_unreadable_todo", todo_id=todo_id, error=str(e))
        return todos

    def get_todo(self, todo_id: str) -> Todo:
        """Get todo by id."""
        if not is_todo_id(todo_id):
            raise NotFoundError(f"Todo not found: {todo_id}")
        try:
            raw = read_todo_file(self.data_path, todo_id)
        except FileNotFoundError as e:
            raise NotFoundError(f"Todo not found: {todo_id}") from e
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"Todo {todo_id} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageIOError(f"Cannot read todo {todo_id}: {e}") from e
        return Todo.from_file(raw, todo_id)

    def create_todo(self, text: str) -> Todo:
        """Create todo with the next id from the counter.

        The counter is advanced before the file is written and is not rolled
        back if the write fails, which leaves a gap in the id sequence.
        """
        todo_id = self.counter.get_next_id()
        timestamp = now()
        todo = Todo(id=todo_id, text=text, create_time=timestamp, update_time=timestamp)
        try:
            write_new_todo_file(self.data_path, todo)
        except FileExistsError as e:
            raise CollisionError(f"Todo file for freshly allocated id {todo_id} already exists") from e
        except OSError as e:
            raise StorageIOError(f"Cannot write todo {todo_id}: {e}") from e

        logger.info("todo_created", todo_id=todo_id)
        return todo

    def update_todo(self, todo_id: str, text: str) -> Todo:
        """Replace the text of an existing todo. Never creates a todo."""
        todo = self.get_todo(todo_id)
        updated = todo.model_copy(update={"text": text, "update_time": now()})
        try:
            replace_todo_file(self.data_path, updated)
        except OSError as e:
            raise StorageIOError(f"Cannot write todo {todo_id}: {e}") from e

        logger.info("todo_updated", todo_id=todo_id)
        return updated

    def delete_todo(self, todo_id: str) -> None:
        """Delete todo by id."""
        if not is_todo_id(todo_id):
            raise NotFoundError(f"Todo not found: {todo_id}")
        try:
            remove_todo_file(self.data_path, todo_id)
        except FileNotFoundError as e:
            raise NotFoundError(f"Todo not found: {todo_id}") from e
        except OSError as e:
            raise StorageIOError(f"Cannot delete todo {todo_id}: {e}") from e

        logger.info("todo_deleted", todo_id=todo_id)
