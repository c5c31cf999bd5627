from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import Optional

from tealeaf.errors import DimensionMismatch, InvalidCutoff, InvalidLength
from tealeaf.noise.rng import check_generator

DEFAULT_FIELD_SIZE = 420
DEFAULT_CUTOFF = 5
DEFAULT_GENERATOR = "lcg"
DEFAULT_SEED_PREFIX = "tealeaf::"


class Direction(Enum):
    FORWARD = "forward"
    INVERSE = "inverse"

    @property
    def sign(self) -> int:
        """Exponent sign: -1 for FORWARD, +1 for INVERSE."""
        return -1 if self is Direction.FORWARD else 1


class MaskBoundaryMode(Enum):
    """Whether the upper edge of the zeroed band is N-c itself (``<=``) or not (``<``)."""
    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"


class NormalizationMode(Enum):
    """Whether the inverse 2D transform is divided by N²."""
    UNNORMALIZED = "unnormalized"
    NORMALIZED = "normalized"


@dataclass
class StencilConfig:
    """
    Generation settings for one stencil.

    field_size : int
        Side of the noise square and of the returned stencil.
    fft_size : int | None
        Side of the transformed field. Larger than ``field_size`` means the
        noise is zero-padded into the top-left corner and the output cropped
        back. ``None`` uses ``field_size``.
    cutoff : int
        Frequency band boundary, 0 <= cutoff <= fft_size/2.
    boundary, normalization :
        Enum members or their string values.
    generator : str
        Noise source name, see ``tealeaf.noise.rng.GENERATORS``.
    seed_prefix : str
        Prepended to a query string before seed derivation.
    """
    field_size: int = DEFAULT_FIELD_SIZE
    fft_size: Optional[int] = None
    cutoff: int = DEFAULT_CUTOFF
    boundary: MaskBoundaryMode = MaskBoundaryMode.INCLUSIVE
    normalization: NormalizationMode = NormalizationMode.UNNORMALIZED
    generator: str = DEFAULT_GENERATOR
    seed_prefix: str = DEFAULT_SEED_PREFIX

    def __post_init__(self):
        if self.field_size < 1:
            raise InvalidLength(self.field_size, f"field_size must be >= 1, got {self.field_size}")
        if self.fft_size is None:
            self.fft_size = self.field_size
        if self.fft_size < self.field_size:
            raise DimensionMismatch((self.field_size, self.field_size), (self.fft_size, self.fft_size))
        check_cutoff(self.cutoff, self.fft_size)
        check_generator(self.generator)
        self.boundary = MaskBoundaryMode(self.boundary)
        self.normalization = NormalizationMode(self.normalization)

    @property
    def threshold(self) -> float:
        # normalized values are the unnormalized ones divided by fft_size²
        t = self.field_size * self.field_size / 2
        if self.normalization is NormalizationMode.NORMALIZED:
            t /= self.fft_size * self.fft_size
        return t


def check_cutoff(cutoff, size: int) -> int:
    if isinstance(cutoff, bool) or not isinstance(cutoff, Integral):
        raise InvalidCutoff(cutoff, size)
    if cutoff < 0 or 2 * cutoff > size:
        raise InvalidCutoff(cutoff, size)
    return cutoff
