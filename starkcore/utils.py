"""Small numeric and timing helpers."""

from __future__ import annotations

import time
from collections.abc import Sequence
from types import TracebackType
from typing import TypeVar

T = TypeVar("T")


class Timer:
    """Measures the time since it was created and reports it when a ``with`` block ends."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._start = time.perf_counter()

    def elapsed(self) -> float:
        """Seconds since the timer was created."""
        return time.perf_counter() - self._start

    def __enter__(self) -> Timer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        print(f"{self.name} in {_format_duration(self.elapsed())}")


def _format_duration(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds * 1e6:.3f}µs"


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def interleave(source: Sequence[T], radix: int) -> list[tuple[T, ...]]:
    """Groups ``source`` into tuples ``(s[i], s[i + n], ..., s[i + (radix-1) n])``.

    ``n`` is ``len(source) // radix``; elements past ``n * radix`` are ignored.
    """
    if radix <= 0:
        raise ValueError(f"radix must be positive, got {radix}")
    n = len(source) // radix
    columns = [source[j * n:(j + 1) * n] for j in range(radix)]
    return list(zip(*columns)) if n else []


def ceil_power_of_two(value: int) -> int:
    """Rounds up to the nearest power of two (zero rounds up to one)."""
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if _is_power_of_two(value):
        return value
    return 1 << value.bit_length() if value else 1


def reduce_lde_blowup_factor(lde: Sequence[T], blowup_from: int, blowup_to: int) -> list[T]:
    """Keeps every ``blowup_from // blowup_to``-th evaluation of a low-degree extension."""
    if blowup_to > blowup_from:
        raise ValueError("target blowup factor cannot exceed the current one")
    if not _is_power_of_two(blowup_from) or not _is_power_of_two(blowup_to):
        raise ValueError("blowup factors must be powers of two")
    factor = blowup_from // blowup_to
    return list(lde[::factor][: len(lde) // factor])


def field_bits(modulus: int, extension_degree: int = 1) -> int:
    """Number of bits in a field of the given prime modulus and extension degree."""
    if modulus < 2:
        raise ValueError(f"modulus must be at least 2, got {modulus}")
    if extension_degree < 1:
        raise ValueError(f"extension degree must be positive, got {extension_degree}")
    return extension_degree * modulus.bit_length()