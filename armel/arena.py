"""Linear (bump) memory arena over a contiguous byte buffer."""

from __future__ import annotations

import enum
import struct
import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO, Union

KB = 1024
MB = KB * 1024
GB = MB * 1024

DEFAULT_ALIGNMENT = 16 if struct.calcsize("P") >= 8 else 8

ItemSize = Union[int, str]


class Flag(enum.IntFlag):
    """Behaviour flags of an arena."""

    NOFLAG = 0
    SOFTFAIL = 0x01
    ZEROS = 0x02


class ArenaError(Exception):
    """Base class of arena errors."""


class AlignmentError(ArenaError, ValueError):
    """The alignment is zero or not a power of two."""


class OutOfMemoryError(ArenaError, MemoryError):
    """The arena has no room for the requested allocation."""


class ArenaFreedError(ArenaError):
    """The arena was never initialised or has already been freed."""


def _check_alignment(alignment: int) -> None:
    if alignment <= 0 or alignment & (alignment - 1):
        raise AlignmentError("alignment must be a non-zero power of 2")


def _item_size(item: ItemSize) -> int:
    return struct.calcsize(item) if isinstance(item, str) else item


def align_up(size: int, alignment: int) -> int:
    """Round ``size`` up to the next multiple of ``alignment``."""
    _check_alignment(alignment)
    mask = alignment - 1
    return (size + mask) & ~mask


def size_of(item_size: ItemSize, count: int, alignment: int = DEFAULT_ALIGNMENT) -> int:
    """Bytes needed for ``count`` items, each padded to ``alignment``.

    ``item_size`` is a byte count or a struct format string.
    """
    return align_up(_item_size(item_size), alignment) * count


@dataclass(frozen=True)
class Block:
    """A region handed out by an arena: its offset, size and a view on it."""

    offset: int
    size: int
    view: memoryview = field(repr=False, compare=False)

    def cast(self, fmt: str) -> memoryview:
        """Return the region as a typed memoryview (e.g. ``"i"``, ``"d"``)."""
        return self.view.cast(fmt)

    def __len__(self) -> int:
        return self.size

    def __bytes__(self) -> bytes:
        return bytes(self.view)


class Arena:
    """A bump allocator: allocations move a cursor forward and are released in bulk."""

    def __init__(
        self,
        size: int,
        alignment: int = DEFAULT_ALIGNMENT,
        flags: Flag = Flag.NOFLAG,
    ) -> None:
        _check_alignment(alignment)
        if size < 0:
            raise ValueError("arena size must not be negative")
        padded = align_up(size, alignment)
        self._setup(memoryview(bytearray(padded)), alignment, flags, owned=True)

    @classmethod
    def from_buffer(
        cls,
        buffer,
        alignment: int = DEFAULT_ALIGNMENT,
        flags: Flag = Flag.NOFLAG,
    ) -> "Arena":
        """Build an arena over a caller-provided writable buffer.

        Such an arena cannot be freed; use :meth:`reset` to reuse it.
        """
        if buffer is None:
            raise ArenaError("from_buffer: buffer is None")
        _check_alignment(alignment)
        view = memoryview(buffer).cast("B")
        if view.readonly:
            raise TypeError("from_buffer: buffer must be writable")
        arena = cls.__new__(cls)
        arena._setup(view, alignment, flags, owned=False)
        return arena

    def _setup(self, view: memoryview, alignment: int, flags: Flag, owned: bool) -> None:
        self._mem: Optional[memoryview] = view
        self._cursor = 0
        self._owned = owned
        self.alignment = alignment
        self.flags = Flag(flags)

    @property
    def mask(self) -> int:
        return self.alignment - 1 if self.alignment else 0

    def _fail(self, error: ArenaError) -> None:
        if self.flags & Flag.SOFTFAIL:
            return None
        raise error

    def alloc(self, size: int) -> Optional[Block]:
        """Reserve ``size`` aligned bytes; ``None`` on failure with SOFTFAIL."""
        if size < 0:
            raise ValueError("allocation size must not be negative")
        if self._mem is None:
            return self._fail(ArenaFreedError("arena is not initialized or has been freed"))

        start = align_up(self._cursor, self.alignment)
        stop = start + size
        end = len(self._mem)
        if stop > end:
            return self._fail(
                OutOfMemoryError(
                    f"arena out of memory: requested {size} bytes, "
                    f"remaining {max(0, end - start)} bytes, "
                    f"cursor {self._cursor}, end {end}"
                )
            )

        view = self._mem[start:stop]
        if self.flags & Flag.ZEROS:
            view[:] = bytes(size)
        self._cursor = stop
        return Block(start, size, view)

    def alloc_zeroed(self, size: int) -> Optional[Block]:
        """Like :meth:`alloc`, but the region is always zero-filled."""
        block = self.alloc(size)
        if block is not None:
            block.view[:] = bytes(size)
        return block

    def make(self, fmt: ItemSize) -> Optional[Block]:
        """Allocate room for one item of struct format (or byte size) ``fmt``."""
        return self.alloc(_item_size(fmt))

    def array(self, fmt: ItemSize, count: int) -> Optional[Block]:
        """Allocate a contiguous run of ``count`` items of ``fmt``."""
        if count < 0:
            raise ValueError("array count must not be negative")
        return self.alloc(_item_size(fmt) * count)

    def reset(self) -> None:
        """Release every allocation by moving the cursor back to the start."""
        self._cursor = 0

    def offset(self) -> int:
        """Current cursor position, in bytes from the start."""
        return self._cursor

    def rewind_to(self, offset: int) -> None:
        """Move the cursor back to an offset obtained from :meth:`offset`."""
        if offset < 0 or offset > self.capacity():
            raise ArenaError("rewind_to: offset out of bounds")
        self._cursor = offset

    def used(self) -> int:
        """Bytes consumed so far, alignment padding included."""
        return self._cursor

    def remaining(self) -> int:
        """Bytes still available for an allocation."""
        if self._mem is None:
            return 0
        return max(0, len(self._mem) - align_up(self._cursor, self.alignment))

    def capacity(self) -> int:
        """Total size of the arena in bytes."""
        return 0 if self._mem is None else len(self._mem)

    def is_freed(self) -> bool:
        return self._mem is None

    def free(self) -> None:
        """Release the arena's memory; the arena is unusable afterwards."""
        if self._mem is None:
            raise ArenaFreedError("arena has already been freed")
        if not self._owned:
            raise ArenaError("cannot free an arena built over a caller buffer; use reset()")
        self._mem = None
        self._cursor = 0
        self.flags = Flag.NOFLAG
        self.alignment = 0

    def info(self) -> str:
        """Describe the arena's state."""
        flags_line = f"  flags     = 0x{int(self.flags):02X}"
        if self.flags:
            names = "".join(
                f"{name} "
                for flag, name in ((Flag.SOFTFAIL, "SOFTFAIL"), (Flag.ZEROS, "ZEROS"))
                if self.flags & flag
            )
            flags_line += f" ({names})"
        return "\n".join(
            [
                "[Arena]",
                f"  capacity  = {self.capacity()} bytes",
                f"  cursor    = {self._cursor}",
                f"  used      = {self.used()} bytes",
                f"  remaining = {self.remaining()} bytes",
                f"  alignment = {self.alignment}",
                flags_line,
            ]
        )

    def print_info(self, file: Optional[TextIO] = None) -> None:
        """Write :meth:`info` followed by a blank line."""
        print(self.info(), end="\n\n", file=file if file is not None else sys.stdout)

    def __enter__(self) -> "Arena":
        return self

    def __exit__(self, *args) -> None:
        if self._owned and self._mem is not None:
            self.free()