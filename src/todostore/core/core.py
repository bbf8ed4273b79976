from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from todostore.config import Config

if TYPE_CHECKING:
    from todostore.core.modules.counter.service import CounterService
    from todostore.core.modules.todo.service import TodoService


class Service:
    """Base class for services backed by files on local disk."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""


class Services:
    """Service registry wiring each service to the services it depends on."""

    counter: CounterService
    todo: TodoService

    def __init__(self, config: Config) -> None:
        from todostore.core.modules.counter.service import CounterService  # noqa: PLC0415
        from todostore.core.modules.todo.service import TodoService  # noqa: PLC0415

        self.counter = CounterService(config)
        self.todo = TodoService(config, self.counter)

        # Start order: the counter is checked before todos can allocate ids from it
        self._services: list[Service] = [self.counter, self.todo]

    async def start_all(self) -> None:
        """Start all services in dependency order."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services in reverse dependency order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config and all service instances."""

    config: Config
    services: Services

    def __init__(self, config: Config) -> None:
        self.config = config
        self.services = Services(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop all services on shutdown."""
        await self.services.stop_all()
