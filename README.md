# armel

A small arena (bump) allocator. An `Arena` owns one fixed-size byte
buffer and hands out aligned slices of it by moving a cursor forward.
Individual allocations are never freed. Memory comes back all at once
through `reset()`, `rewind_to()` or `free()`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using an arena

```python
from armel.arena import KB, Arena, Flag

with Arena(4 * KB) as a:
    block = a.alloc(12)          # aligned slice of the arena's buffer
    mark = a.offset()            # remember where the cursor is
    a.alloc(64)                  # temporary data
    a.rewind_to(mark)            # drop everything allocated after `mark`
    print(a.used(), a.remaining(), a.capacity())
    a.reset()                    # cursor back to the start
```

Everything lives in `armel.arena`.

- `Arena(size, alignment=DEFAULT_ALIGNMENT, flags=Flag.NOFLAG)` allocates
  a zero-filled buffer of `size` bytes rounded up to the alignment.
  `DEFAULT_ALIGNMENT` is 16 on 64-bit builds of Python and 8 otherwise.
  `KB`, `MB` and `GB` are provided as byte counts.
- `alloc(size)` returns a `Block` that holds the `offset` and `size` of the
  region and a `view` on it. The offset is a multiple of the arena's
  alignment. `alloc_zeroed(size)` does the same and clears the bytes.
- `make(fmt)` allocates room for one value of a `struct` format string,
  or of a byte count, and `array(fmt, count)` allocates room for `count`
  of them. `Block.cast(fmt)` returns the block as a typed `memoryview`.
  `len(block)` and `bytes(block)` also work.
- `offset()` and `rewind_to(offset)` give scoped, temporary allocations.
  `reset()` empties the whole arena.
- `used()` gives the bytes taken so far, alignment padding included.
  `remaining()` gives the bytes still available once the cursor is
  aligned, and `capacity()` gives the total size.
- `free()` releases the buffer, and `is_freed()` tells whether that has
  happened. Using an owned arena as a context manager frees it on exit.
- `Arena.from_buffer(buffer, alignment, flags)` builds an arena over a
  writable buffer you already have. Such an arena cannot be freed, so use
  `reset()` to reuse it.
- `info()` returns a text summary of capacity, cursor, used and remaining
  bytes, alignment and flags. `print_info(file)` writes it, followed by a
  blank line, to `file` or to standard output.

### Errors

- An alignment that is zero or not a power of two raises `AlignmentError`.
- Running out of room raises `OutOfMemoryError`.
- Allocating from a freed arena raises `ArenaFreedError`.
- Freeing an arena twice also raises `ArenaFreedError`.
- Freeing an arena built with `from_buffer` raises `ArenaError`.
- Rewinding past the arena's capacity raises `ArenaError`.
- A negative size or count raises `ValueError`.

`AlignmentError`, `OutOfMemoryError` and `ArenaFreedError` are all
subclasses of `ArenaError`.

### Flags

- `Flag.SOFTFAIL` makes a failed allocation return `None` instead of
  raising.
- `Flag.ZEROS` clears every allocation as it is handed out.

### Sizes

- `align_up(size, alignment)` rounds a size up to a multiple of the
  alignment.
- `size_of(item_size, count, alignment)` gives the buffer size needed for
  `count` items, each padded to the alignment. `item_size` is a byte count
  or a `struct` format string.

## Commands

```
armel-demo [alignment] [simple] [static] [temp]
```

This runs the bundled examples, or all of them when none is named:

- `alignment` prints an arena's state and the alignment remainders of its
  start, its cursor and one allocated item.
- `simple` stores two ints in an arena.
- `static` fills a float array inside an existing buffer.
- `temp` makes temporary allocations and undoes them with `rewind_to`.

```
armel-bench [--n N] [--repeat R] [--pause SECONDS]
```

This times arena allocation against allocating a fresh `bytearray`. It
prints, for each case, the average of `R` runs with the fastest and
slowest run dropped, in nanoseconds per operation. The defaults are
10,000,000 iterations and 20 runs, with one second of pause between
cases. That takes a long time in Python, so pass a smaller `--n` for a
quick look. The same functions are available as `armel.bench.run_all`,
`bench_avg` and `trimmed_average`.

## What it does not do

An arena here is a view over a Python `bytearray`, not memory mapped from
the operating system. Blocks carry offsets into that buffer, not machine
addresses. Alignment is therefore relative to the start of the buffer.
Nothing here hands out raw pointers, and nothing shares memory with
native code.