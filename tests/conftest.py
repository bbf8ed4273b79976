"""Shared pytest fixtures."""

import asyncio
from pathlib import Path

import pytest

from todostore.config import Config
from todostore.core.core import Core


@pytest.fixture
def config(tmp_path):
    """Config pointing the data directory and counter file into a temporary directory."""
    return Config(
        data_path=str(tmp_path / "data"),
        counter_path=str(tmp_path / "counter.txt"),
        _env_file=None,
    )


@pytest.fixture
def core(config):
    """Started core with both services wired together."""
    core = Core(config)
    asyncio.run(core.on_start())
    return core


@pytest.fixture
def counter_service(core):
    return core.services.counter


@pytest.fixture
def todo_service(core):
    return core.services.todo


@pytest.fixture
def data_dir(config):
    return Path(config.data_path)


@pytest.fixture
def counter_file(config):
    return Path(config.counter_path)
