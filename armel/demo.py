"""Small walkthroughs of arena usage."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from armel.arena import KB, Arena


def _stream(out: Optional[TextIO]) -> TextIO:
    return out if out is not None else sys.stdout


def alignment_report(out: Optional[TextIO] = None) -> Tuple[int, int, int]:
    """Show a local arena's state and the alignment of base, cursor and one item."""
    stream = _stream(out)
    arena = Arena.from_buffer(bytearray(KB))
    item = arena.make("i")
    arena.print_info(stream)
    residues = (0 % arena.alignment, arena.offset() % arena.alignment, item.offset % arena.alignment)
    for residue in residues:
        print(f"{residue} ", file=stream)
    return residues


def simple_alloc(out: Optional[TextIO] = None) -> Tuple[int, int]:
    """Allocate two ints, store values in them and print them."""
    with Arena(4 * KB) as arena:
        a = arena.make("i").cast("i")
        b = arena.make("i").cast("i")
        a[0] = 10
        b[0] = 42
        print(f"a = {a[0]}, b = {b[0]}", file=_stream(out))
        return a[0], b[0]


def static_arena(out: Optional[TextIO] = None) -> List[float]:
    """Fill a float array held in a caller-provided buffer."""
    temp = Arena.from_buffer(bytearray(1024))
    values = temp.array("f", 16).cast("f")
    values[:] = memoryview(bytes(len(values) * values.itemsize)).cast("f")
    for i in range(len(values)):
        values[i] = i + 0.5
    print(f"values[10] = {values[10]:.1f}", file=_stream(out))
    return values.tolist()


def temp_scope(out: Optional[TextIO] = None) -> int:
    """Take a mark, allocate temporaries, then rewind to the mark."""
    with Arena(8 * KB) as arena:
        mark = arena.offset()
        temp = arena.array("i", 5).cast("i")
        for i in range(len(temp)):
            temp[i] = i * 2
        value = temp[2]
        print(f"temp[2] = {value}", file=_stream(out))
        arena.rewind_to(mark)
        return arena.offset()


_EXAMPLES = {
    "alignment": alignment_report,
    "simple": simple_alloc,
    "static": static_arena,
    "temp": temp_scope,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run arena examples.")
    parser.add_argument(
        "examples",
        nargs="*",
        choices=sorted(_EXAMPLES),
        help="examples to run (all when omitted)",
    )
    args = parser.parse_args(argv)
    for name in args.examples or list(_EXAMPLES):
        _EXAMPLES[name]()
    return 0


if __name__ == "__main__":
    sys.exit(main())