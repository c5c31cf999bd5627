"""
Bluestein (chirp-z) transform for arbitrary lengths.

Using -2kn = (k-n)² - k² - n², the length-N DFT becomes a circular
convolution with a quadratic-phase chirp:

    a[n] = exp(sign·iπn²/N)
    X[k] = a[k] · Σ_n (x[n]·a[n]) · conj-chirp[k-n]

The convolution runs through three radix-2 transforms of length
M = nextPowerOfTwo(2N-1), with an explicit 1/M on the unnormalized inverse.
"""
from __future__ import annotations

import logging
import math

import torch

from tealeaf.config import Direction
from tealeaf.errors import InvalidLength
from tealeaf.transforms.complex_math import (
    DTYPE,
    ComplexLike,
    as_complex_tensor,
    cmul,
    cscale,
    unit_phasors,
)
from tealeaf.transforms.radix2 import next_power_of_two, radix2_fft

logger = logging.getLogger(__name__)


def convolution_length(n: int) -> int:
    return next_power_of_two(2 * n - 1)


def chirp_set(n: int, m: int, direction: Direction, device=None) -> tuple[torch.Tensor, torch.Tensor]:
    """
    Returns:
        a: (n,) chirp exp(sign·iπk²/n)
        b: (m,) conjugate chirp placed circularly, b[k] = b[m-k] for 0 < k < n
    """
    k = torch.arange(n, dtype=torch.long, device=device)
    # exp(iπk²/n) has period 2n in k², reduce before leaving integers
    k2 = ((k * k) % (2 * n)).to(torch.float64)
    angle = k2 * (math.pi / n)
    a = unit_phasors(direction.sign * angle)

    b = torch.zeros(m, dtype=DTYPE, device=device)
    conj = unit_phasors(-direction.sign * angle)
    b[:n] = conj                                  # conj[0] = 1
    if n > 1:
        b[m - n + 1:] = conj[1:].flip(0)          # b[m-k] = conj[k]
    return a, b


def bluestein_fft(x: ComplexLike, direction: Direction = Direction.FORWARD) -> torch.Tensor:
    """
    Args:
        x: (..., N) complex tensor or sequence of ComplexValue, any N >= 1.
        direction: FORWARD or INVERSE (unnormalized, like radix2_fft).
    Returns:
        new (..., N) complex128 tensor.
    """
    x = as_complex_tensor(x)
    n = x.shape[-1]
    if n < 1:
        raise InvalidLength(n, "Bluestein transform needs at least one sample")
    m = convolution_length(n)
    logger.debug("bluestein n=%d m=%d direction=%s", n, m, direction.value)

    a, b = chirp_set(n, m, direction, device=x.device)

    padded = torch.zeros(*x.shape[:-1], m, dtype=DTYPE, device=x.device)
    padded[..., :n] = cmul(x, a)

    fa = radix2_fft(padded, Direction.FORWARD)
    fb = radix2_fft(b, Direction.FORWARD)
    conv = radix2_fft(cmul(fa, fb), Direction.INVERSE)
    conv = cscale(conv[..., :n], 1.0 / m)
    return cmul(conv, a)
