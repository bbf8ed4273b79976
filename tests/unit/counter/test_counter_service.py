"""Tests for the file-backed id counter."""

import asyncio
import errno
from concurrent.futures import ThreadPoolExecutor

import pytest

from todostore.core.modules.counter import service as counter_service_module
from todostore.core.modules.counter.models import format_id, parse_counter
from todostore.errors import CorruptStateError, StorageIOError


class TestParseCounter:
    """Tests for parsing counter file contents."""

    def test_empty_contents_mean_zero(self):
        """Test that an empty counter file means nothing was allocated yet."""
        assert parse_counter("") == 0
        assert parse_counter("  \n") == 0

    def test_zero_padded_value(self):
        """Test that zero-padded values written by the counter parse back."""
        assert parse_counter("00025") == 25
        assert parse_counter("00371\n") == 371

    def test_non_numeric_contents_are_corrupt(self):
        """Test that garbage is reported instead of silently reset to 0."""
        with pytest.raises(CorruptStateError, match="not a non-negative integer"):
            parse_counter("abc")

    def test_negative_and_fractional_values_are_corrupt(self):
        """Test that only non-negative integers are accepted."""
        with pytest.raises(CorruptStateError):
            parse_counter("-1")
        with pytest.raises(CorruptStateError):
            parse_counter("1.5")


class TestFormatId:
    """Tests for id formatting."""

    def test_zero_padded_to_five_digits(self):
        assert format_id(1) == "00001"
        assert format_id(26) == "00026"
        assert format_id(99999) == "99999"

    def test_values_past_width_grow(self):
        """Test that values wider than the padding are not truncated."""
        assert format_id(100000) == "100000"


class TestGetNextId:
    """Tests for CounterService.get_next_id."""

    def test_missing_file_starts_at_one(self, counter_service, counter_file):
        """Test that a missing counter file is treated as 0."""
        assert not counter_file.exists()
        assert counter_service.get_next_id() == "00001"
        assert counter_file.read_text() == "00001"

    def test_empty_file_starts_at_one(self, counter_service, counter_file):
        """Test that an empty counter file is treated as 0."""
        counter_file.write_text("")
        assert counter_service.get_next_id() == "00001"

    def test_id_is_zero_padded_string(self, counter_service):
        """Test that ids are zero-padded strings."""
        todo_id = counter_service.get_next_id()
        assert isinstance(todo_id, str)
        assert todo_id.startswith("0")
        assert len(todo_id) == 5

    def test_next_id_follows_count_in_file(self, counter_service, counter_file):
        """Test that the next id is one more than the stored count."""
        counter_file.write_text("00025")
        assert counter_service.get_next_id() == "00026"

    def test_counter_file_updated_with_next_value(self, counter_service, counter_file):
        """Test that the counter file holds the id that was just returned."""
        counter_file.write_text("00371")
        todo_id = counter_service.get_next_id()
        assert counter_file.read_text() == "00372"
        assert todo_id == counter_file.read_text()

    def test_consecutive_calls_increment_by_one(self, counter_service, counter_file):
        """Test that successive calls return consecutive values."""
        counter_file.write_text("00007")
        ids = [counter_service.get_next_id() for _ in range(5)]
        assert ids == ["00008", "00009", "00010", "00011", "00012"]

    def test_corrupt_file_raises_and_is_left_unchanged(self, counter_service, counter_file):
        """Test that corrupt counter contents fail the call without overwriting the file."""
        counter_file.write_text("not a number")
        with pytest.raises(CorruptStateError):
            counter_service.get_next_id()
        assert counter_file.read_text() == "not a number"

    def test_undecodable_file_is_corrupt(self, counter_service, counter_file):
        """Test that bytes that are not UTF-8 are reported as corruption and left in place."""
        counter_file.write_bytes(b"\xff\xff")
        with pytest.raises(CorruptStateError, match="not valid UTF-8"):
            counter_service.get_next_id()
        assert counter_file.read_bytes() == b"\xff\xff"

    def test_failed_write_keeps_previous_value(self, counter_service, counter_file, monkeypatch):
        """Test that a failed write neither empties the counter nor lets an id be handed out twice."""
        counter_file.write_text("00025")

        def fail_replace(src, dst):
            raise OSError(errno.ENOSPC, "No space left on device")

        with monkeypatch.context() as m:
            m.setattr(counter_service_module.os, "replace", fail_replace)
            with pytest.raises(StorageIOError):
                counter_service.get_next_id()

        assert counter_file.read_text() == "00025"
        assert not [p for p in counter_file.parent.iterdir() if p.name.endswith(".tmp")]
        assert counter_service.get_next_id() == "00026"

    def test_concurrent_calls_return_distinct_ids(self, counter_service, counter_file):
        """Test that increments from many threads are neither lost nor duplicated."""
        with ThreadPoolExecutor(max_workers=8) as executor:
            ids = list(executor.map(lambda _: counter_service.get_next_id(), range(100)))

        assert len(set(ids)) == 100
        assert sorted(ids) == [format_id(n) for n in range(1, 101)]
        assert counter_file.read_text() == "00100"


class TestPeek:
    """Tests for CounterService.peek."""

    def test_missing_file_is_zero(self, counter_service):
        assert counter_service.peek() == 0

    def test_peek_does_not_advance(self, counter_service, counter_file):
        """Test that peek reads the stored value without changing it."""
        counter_file.write_text("00042")
        assert counter_service.peek() == 42
        assert counter_service.peek() == 42
        assert counter_file.read_text() == "00042"

    def test_start_rejects_corrupt_counter(self, counter_service, counter_file):
        """Test that startup fails on a corrupt counter instead of handing out ids from 0."""
        counter_file.write_text("garbage")
        with pytest.raises(CorruptStateError):
            asyncio.run(counter_service.on_start())
