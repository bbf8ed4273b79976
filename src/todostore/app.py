from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from todostore.config import Config
from todostore.core.core import Core
from todostore.core.modules.todo.models import Todo


class App:
    """Facade for all application operations, delegates to Core services."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def get_todos(self) -> list[Todo]:
        """Get all todos ordered by id."""
        return self._core.services.todo.list_todos()

    def get_todo(self, todo_id: str) -> Todo:
        """Get a single todo. Raises NotFoundError if it doesn't exist."""
        return self._core.services.todo.get_todo(todo_id)

    def create_todo(self, text: str) -> Todo:
        """Create todo with the next sequential id."""
        return self._core.services.todo.create_todo(text)

    def update_todo(self, todo_id: str, text: str) -> Todo:
        """Replace todo text. Raises NotFoundError if it doesn't exist."""
        return self._core.services.todo.update_todo(todo_id, text)

    def delete_todo(self, todo_id: str) -> None:
        """Delete todo. Raises NotFoundError if it doesn't exist."""
        self._core.services.todo.delete_todo(todo_id)
