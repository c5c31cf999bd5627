"""
Deterministic 32-bit pseudo-random bit streams.

Both generators use plain integer arithmetic masked to 32 bits, so a seed
yields the same stream on every platform.

    lcg         ANSI C rand():  s = (1103515245·s + 12345) & 0x7fffffff
                                 out = (s >> 16) & 0x7fff,  bit = out & 1
    mulberry32  float r ∈ [0, 1),  bit = floor(2r)
"""
from __future__ import annotations

from typing import Callable, Dict, Iterator

from tealeaf.errors import UnknownGenerator

MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


class CRandGenerator:
    def __init__(self, seed: int):
        self.state = (seed & MASK32) & 0x7FFFFFFF

    def next_int(self) -> int:
        self.state = (1103515245 * self.state + 12345) & 0x7FFFFFFF
        return (self.state >> 16) & 0x7FFF

    def next_bit(self) -> int:
        return self.next_int() & 1


class Mulberry32:
    def __init__(self, seed: int):
        self.state = seed & MASK32

    def next_float(self) -> float:
        self.state = (self.state + 0x6D2B79F5) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296

    def next_bit(self) -> int:
        return int(self.next_float() * 2)


GENERATORS: Dict[str, Callable[[int], object]] = {
    "lcg": CRandGenerator,
    "mulberry32": Mulberry32,
}


def check_generator(name: str) -> str:
    if name not in GENERATORS:
        raise UnknownGenerator(name, GENERATORS)
    return name


def make_generator(name: str, seed: int):
    return GENERATORS[check_generator(name)](seed)


def bit_stream(seed: int, count: int, generator: str = "lcg") -> Iterator[int]:
    """Yield `count` bits (0/1) from the named generator."""
    rng = make_generator(generator, seed)
    for _ in range(count):
        yield rng.next_bit()
