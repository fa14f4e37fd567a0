"""Linear (bump) arena allocator with alignment, rewind and reset, plus examples and benchmarks."""

__version__ = "0.1.0"
__all__ = ["arena", "bench", "demo"]