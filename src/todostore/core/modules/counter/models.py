"""Sequential id numbering backed by a single counter file."""

import re

from todostore.errors import CorruptStateError

ID_WIDTH = 5  # Ids are zero-padded to this many digits: 1 -> "00001"

COUNTER_RE = re.compile(r"[0-9]+")


def format_id(value: int) -> str:
    """Format a counter value as a zero-padded id string."""
    return f"{value:0{ID_WIDTH}d}"


def parse_counter(raw: str) -> int:
    """Parse counter file contents into the last allocated value.

    Empty (or whitespace-only) contents mean nothing has been allocated yet.
    Anything other than a non-negative decimal integer is corruption and is
    never silently reset to 0.
    """
    stripped = raw.strip()
    if not stripped:
        return 0
    if not COUNTER_RE.fullmatch(stripped):
        raise CorruptStateError(f"Counter file contents are not a non-negative integer: {stripped!r}")
    return int(stripped)
