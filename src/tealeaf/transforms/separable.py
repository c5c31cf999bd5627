"""
Separable 2D transform: every row, then every column, with the 1D engine
chosen once per size.

Path selection is a tagged variant rather than a class hierarchy:

    select_path(n) -> PowerOfTwoPath(n)   if n is a power of two
                   -> GeneralPath(n, m)   otherwise (Bluestein, m = conv length)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import torch
import torch.nn as nn

from tealeaf.config import Direction, NormalizationMode
from tealeaf.errors import DimensionMismatch
from tealeaf.transforms.bluestein import bluestein_fft, convolution_length
from tealeaf.transforms.complex_math import ComplexLike, as_complex_tensor, cscale
from tealeaf.transforms.radix2 import is_power_of_two, radix2_fft

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PowerOfTwoPath:
    n: int

    def apply(self, x: torch.Tensor, direction: Direction) -> torch.Tensor:
        return radix2_fft(x, direction)


@dataclass(frozen=True)
class GeneralPath:
    n: int
    m: int

    def apply(self, x: torch.Tensor, direction: Direction) -> torch.Tensor:
        return bluestein_fft(x, direction)


TransformPath = Union[PowerOfTwoPath, GeneralPath]


def select_path(n: int) -> TransformPath:
    if is_power_of_two(n):
        return PowerOfTwoPath(n)
    return GeneralPath(n, convolution_length(n))


def check_field(field: torch.Tensor, expected_size: Optional[int] = None) -> int:
    """Validate a square 2D field and return its side."""
    shape = tuple(field.shape)
    if field.dim() != 2 or shape[0] != shape[1]:
        n = expected_size if expected_size is not None else (shape[0] if shape else 0)
        raise DimensionMismatch((n, n), shape)
    if expected_size is not None and shape[0] != expected_size:
        raise DimensionMismatch((expected_size, expected_size), shape)
    return shape[0]


def transform1d(x: ComplexLike, direction: Direction = Direction.FORWARD) -> torch.Tensor:
    """1D transform along the last dimension for any length >= 1."""
    x = as_complex_tensor(x)
    return select_path(x.shape[-1]).apply(x, direction)


def transform2d(
    field: ComplexLike,
    direction: Direction = Direction.FORWARD,
    *,
    normalization: NormalizationMode = NormalizationMode.UNNORMALIZED,
    expected_size: Optional[int] = None,
) -> torch.Tensor:
    """
    Args:
        field: (N, N) complex tensor or nested sequence of ComplexValue.
        direction: FORWARD or INVERSE.
        normalization: NORMALIZED divides the INVERSE result by N².
        expected_size: if given, N must equal it.
    Returns:
        new (N, N) complex128 tensor.
    """
    field = as_complex_tensor(field)
    n = check_field(field, expected_size)
    path = select_path(n)
    logger.debug("transform2d n=%d path=%s direction=%s", n, type(path).__name__, direction.value)

    rows = path.apply(field, direction)
    out = path.apply(rows.transpose(0, 1), direction).transpose(0, 1).contiguous()

    if direction is Direction.INVERSE and NormalizationMode(normalization) is NormalizationMode.NORMALIZED:
        out = cscale(out, 1.0 / (n * n))
    return out


class SeparableTransform2D(nn.Module):
    """
    Fixed-size 2D transform stage.

    Args:
        size (int): side N of every field this stage accepts
        normalization (NormalizationMode): applied to INVERSE passes
    """
    def __init__(self, size: int, normalization: NormalizationMode = NormalizationMode.UNNORMALIZED):
        super().__init__()
        self.size = size
        self.normalization = NormalizationMode(normalization)
        self.path = select_path(size)

    def forward(self, field: torch.Tensor, direction: Direction = Direction.FORWARD) -> torch.Tensor:
        return transform2d(
            field,
            direction,
            normalization=self.normalization,
            expected_size=self.size,
        )

    def extra_repr(self) -> str:
        return f"size={self.size}, path={type(self.path).__name__}, normalization={self.normalization.value}"
