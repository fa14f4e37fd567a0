"""Micro-benchmarks comparing arena allocation with plain byte buffers."""

from __future__ import annotations

import argparse
import sys
import time
from array import array
from typing import Callable, Dict, Optional, Sequence, TextIO

from armel.arena import KB, MB, Arena, Flag

DEFAULT_N = 10_000_000
DEFAULT_REPEAT = 20

_INT_SIZE = array("i").itemsize
_ARRAY_LEN = 200
_ARRAY_VALUES = array("i", range(_ARRAY_LEN))

BenchFunc = Callable[[], int]


def now_ns() -> int:
    """Monotonic clock reading in nanoseconds."""
    return time.monotonic_ns()


def trimmed_average(results: Sequence[float]) -> float:
    """Mean of ``results`` with the smallest and largest value dropped."""
    if len(results) < 3:
        raise ValueError("trimmed_average needs at least 3 results")
    middle = sorted(results)[1:-1]
    return sum(middle) / len(middle)


def bench_avg(
    label: str,
    fn: BenchFunc,
    repeat: int = DEFAULT_REPEAT,
    out: Optional[TextIO] = None,
) -> float:
    """Run ``fn`` ``repeat`` times, report and return the trimmed average."""
    if repeat < 3:
        raise ValueError("repeat must be at least 3")
    results = [fn() for _ in range(repeat)]
    avg = trimmed_average(results)
    print(
        f"⏱ {label} avg over {repeat - 2} runs: {avg:.2f} ns/op",
        file=out if out is not None else sys.stdout,
    )
    return avg


def _check_n(n: int) -> None:
    if n <= 0:
        raise ValueError("iteration count must be positive")


def _per_op(start: int, n: int) -> int:
    return (now_ns() - start) // n


def bench_bytes_zeroed(n: int = DEFAULT_N) -> int:
    """Fresh zeroed buffer of 200 ints per iteration, read back in full."""
    _check_n(n)
    sink = 0
    start = now_ns()
    for _ in range(n):
        view = memoryview(bytearray(_INT_SIZE * _ARRAY_LEN)).cast("i")
        sink += sum(view)
        sink += view[0]
    return _per_op(start, n)


def bench_arena_zeros(n: int = DEFAULT_N) -> int:
    """Zero-filling arena array of 200 ints per iteration, then reset."""
    _check_n(n)
    sink = 0
    arena = Arena(KB, 16, Flag.ZEROS)
    start = now_ns()
    for _ in range(n):
        values = arena.array("i", _ARRAY_LEN).cast("i")
        sink += sum(values)
        arena.reset()
    arena.free()
    return _per_op(start, n)


def bench_arena_new_custom(n: int = DEFAULT_N) -> int:
    """Create and free a custom-aligned arena per iteration."""
    _check_n(n)
    start = now_ns()
    for _ in range(n):
        Arena(KB, 8, Flag.NOFLAG).free()
    return _per_op(start, n)


def bench_arena_new(n: int = DEFAULT_N) -> int:
    """Create and free a default arena per iteration."""
    _check_n(n)
    start = now_ns()
    for _ in range(n):
        Arena(KB).free()
    return _per_op(start, n)


def bench_bytes_single(n: int = DEFAULT_N) -> int:
    """Fresh single-int buffer per iteration."""
    _check_n(n)
    sink = 0
    start = now_ns()
    for i in range(n):
        view = memoryview(bytearray(_INT_SIZE)).cast("i")
        view[0] = i & 0x7FFFFFFF
        sink += view[0]
    return _per_op(start, n)


def bench_arena_make_single(n: int = DEFAULT_N) -> int:
    """Single int from an arena per iteration, then reset."""
    _check_n(n)
    sink = 0
    arena = Arena(KB)
    start = now_ns()
    for i in range(n):
        value = arena.make("i").cast("i")
        value[0] = i & 0x7FFFFFFF
        sink += value[0]
        arena.reset()
    arena.free()
    return _per_op(start, n)


def bench_bytes_array(n: int = DEFAULT_N) -> int:
    """Fresh buffer of 200 ints, filled and summed, per iteration."""
    _check_n(n)
    sink = 0
    start = now_ns()
    for _ in range(n):
        values = memoryview(bytearray(_INT_SIZE * _ARRAY_LEN)).cast("i")
        values[:] = _ARRAY_VALUES
        sink += sum(values)
    return _per_op(start, n)


def bench_arena_array(n: int = DEFAULT_N) -> int:
    """Arena array of 200 ints, filled and summed, per iteration."""
    _check_n(n)
    sink = 0
    start = now_ns()
    arena = Arena(MB)
    for _ in range(n):
        values = arena.array("i", _ARRAY_LEN).cast("i")
        values[:] = _ARRAY_VALUES
        sink += sum(values)
        arena.reset()
    arena.free()
    return _per_op(start, n)


_SUITE = (
    ("malloc + memset", bench_bytes_zeroed),
    ("arl_array (ZEROS)", bench_arena_zeros),
    ("arl_new_custom", bench_arena_new_custom),
    ("arl_new", bench_arena_new),
    ("malloc single", bench_bytes_single),
    ("arl_make", bench_arena_make_single),
    ("malloc array", bench_bytes_array),
    ("arl_array", bench_arena_array),
)


def run_all(
    n: int = DEFAULT_N,
    repeat: int = DEFAULT_REPEAT,
    pause: float = 1.0,
    out: Optional[TextIO] = None,
) -> Dict[str, float]:
    """Run the whole suite and return the average per label."""
    _check_n(n)
    stream = out if out is not None else sys.stdout
    print(f"=== Benchmark (N = {n}) ===", file=stream)
    averages: Dict[str, float] = {}
    for label, fn in _SUITE:
        averages[label] = bench_avg(label, lambda fn=fn: fn(n), repeat, stream)
        if pause > 0:
            time.sleep(pause)
    return averages


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Arena allocation benchmarks.")
    parser.add_argument("--n", type=int, default=DEFAULT_N, help="iterations per run")
    parser.add_argument("--repeat", type=int, default=DEFAULT_REPEAT, help="runs per benchmark")
    parser.add_argument("--pause", type=float, default=1.0, help="seconds between benchmarks")
    args = parser.parse_args(argv)
    try:
        run_all(args.n, args.repeat, args.pause)
    except ValueError as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())