from __future__ import annotations

from typing import Optional

import torch

from tealeaf.errors import DimensionMismatch, InvalidLength
from tealeaf.noise.rng import bit_stream
from tealeaf.transforms.complex_math import DTYPE


def random_binary_field(
    seed: int,
    size: int,
    fft_size: Optional[int] = None,
    generator: str = "lcg",
) -> torch.Tensor:
    """
    Noise field for one stencil.

    The top-left size×size square is filled row-major with bits from the
    seeded generator; the remainder of the fft_size×fft_size field (zero
    padding) stays 0. Imaginary parts are 0.

    Returns:
        (fft_size, fft_size) complex128 tensor.
    """
    if size < 1:
        raise InvalidLength(size, f"noise field size must be >= 1, got {size}")
    fft_size = size if fft_size is None else fft_size
    if fft_size < size:
        raise DimensionMismatch((size, size), (fft_size, fft_size))

    bits = torch.tensor(list(bit_stream(seed, size * size, generator)), dtype=torch.float64)
    real = torch.zeros(fft_size, fft_size, dtype=torch.float64)
    real[:size, :size] = bits.view(size, size)
    return torch.complex(real, torch.zeros_like(real)).to(DTYPE)
