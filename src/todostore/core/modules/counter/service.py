import fcntl
import os
import tempfile
import threading
from pathlib import Path

import structlog

from todostore.config import Config
from todostore.core.core import Service
from todostore.core.modules.counter.models import format_id, parse_counter
from todostore.errors import CorruptStateError, StorageIOError

logger = structlog.get_logger(__name__)


class CounterService(Service):
    """Hands out unique, monotonically increasing ids persisted in a counter file.

    The read-increment-write sequence is guarded by a process-wide lock and an
    exclusive flock on a sibling ``.lock`` file, so concurrent callers in threads
    or in other processes on the same host never receive the same id. The new
    value is written to a temp file and renamed over the counter, so a failed
    write leaves the previous value in place.
    """

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self.counter_path = Path(config.counter_path)
        self.lock_path = self.counter_path.with_name(f"{self.counter_path.name}.lock")
        self._lock = threading.Lock()

    async def on_start(self) -> None:
        """Make sure the counter file's directory exists and its contents parse."""
        self.counter_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("counter_loaded", counter_path=str(self.counter_path), last_id=self.peek())

    def peek(self) -> int:
        """Return the last allocated value without advancing the counter."""
        try:
            raw = self.counter_path.read_bytes()
        except FileNotFoundError:
            return 0
        except OSError as e:
            raise StorageIOError(f"Cannot read counter file {self.counter_path}: {e}") from e
        try:
            return parse_counter(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"Counter file {self.counter_path} is not valid UTF-8: {e}") from e

    def get_next_id(self) -> str:
        """Advance the counter by one, persist it and return the new zero-padded id."""
        with self._lock:
            try:
                with self.lock_path.open("a") as lock_file:
                    fcntl.flock(lock_file, fcntl.LOCK_EX)
                    next_id = format_id(self.peek() + 1)
                    self._write(next_id)
            except OSError as e:
                raise StorageIOError(f"Cannot update counter file {self.counter_path}: {e}") from e

        logger.debug("counter_advanced", counter_path=str(self.counter_path), id=next_id)
        return next_id

    def _write(self, value: str) -> None:
        """Atomically replace the counter file contents."""
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.counter_path.parent,
            prefix=f"{self.counter_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            try:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            except OSError:
                tmp_path.unlink(missing_ok=True)
                raise
        try:
            os.replace(tmp_path, self.counter_path)
        finally:
            tmp_path.unlink(missing_ok=True)
