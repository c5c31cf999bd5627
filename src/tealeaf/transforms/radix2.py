"""
Iterative radix-2 Cooley–Tukey transform (decimation in time).

Operates on the last dimension of a complex tensor, so a stack of rows is
transformed in one call:

    x ∈ ℂ^{...×N}, N = 2^k
      —bit-reverse→  x[rev(i)]
      —butterflies→  len = 2, 4, …, N

    u = x[j],  v = x[j + len/2] · W^j,   W = exp(sign · 2πi / len)
    x[j] ← u + v,  x[j + len/2] ← u − v

sign is −1 for FORWARD and +1 for INVERSE. The INVERSE result is not divided
by N; callers that want a normalized inverse scale it themselves.
"""
from __future__ import annotations

import math

import torch

from tealeaf.config import Direction
from tealeaf.errors import InvalidLength
from tealeaf.transforms.complex_math import (
    ComplexLike,
    as_complex_tensor,
    cadd,
    cmul,
    csub,
    unit_phasors,
)


def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def bit_reverse_indices(n: int, device=None) -> torch.Tensor:
    """Index permutation reversing the ceil(log2 n) low bits of 0..n-1."""
    bits = max(n - 1, 0).bit_length()
    idx = torch.arange(n, dtype=torch.long, device=device)
    rev = torch.zeros_like(idx)
    for _ in range(bits):
        rev = (rev << 1) | (idx & 1)
        idx = idx >> 1
    return rev


def twiddle_set(length: int, direction: Direction, device=None) -> torch.Tensor:
    """W^j for j in [0, length/2), W = exp(sign·2πi/length)."""
    j = torch.arange(length // 2, dtype=torch.float64, device=device)
    return unit_phasors(j * (direction.sign * 2.0 * math.pi / length))


def radix2_fft(x: ComplexLike, direction: Direction = Direction.FORWARD) -> torch.Tensor:
    """
    Args:
        x: (..., N) complex tensor or sequence of ComplexValue, N a power of two.
        direction: FORWARD or INVERSE (unnormalized).
    Returns:
        new (..., N) complex128 tensor.
    Raises:
        InvalidLength: N is not a power of two (N of 0 or 1 passes through).
    """
    x = as_complex_tensor(x)
    n = x.shape[-1]
    if n <= 1:
        return x.clone()
    if not is_power_of_two(n):
        raise InvalidLength(n, f"radix-2 transform needs a power-of-two length, got {n}")

    lead = x.shape[:-1]
    out = x.index_select(-1, bit_reverse_indices(n, device=x.device))

    length = 2
    while length <= n:
        half = length // 2
        w = twiddle_set(length, direction, device=x.device)          # (half,)
        blocks = out.reshape(*lead, n // length, length)
        u = blocks[..., :half]
        v = cmul(blocks[..., half:], w)
        out = torch.cat((cadd(u, v), csub(u, v)), dim=-1).reshape(*lead, n)
        length <<= 1
    return out
