"""
TeaLeaf generator: seeded noise → 2D transform → band mask → inverse → threshold.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import torch
import torch.nn as nn

from tealeaf.config import Direction, StencilConfig
from tealeaf.noise.field import random_binary_field
from tealeaf.noise.seed import seed_from_query
from tealeaf.transforms.mask import FrequencyMask
from tealeaf.transforms.separable import SeparableTransform2D

logger = logging.getLogger(__name__)


def threshold_field(values: torch.Tensor, threshold: float) -> torch.Tensor:
    """True where the real component exceeds `threshold`; imaginary parts are ignored."""
    if values.is_complex():
        values = values.real
    return values > threshold


@dataclass
class StencilResult:
    seed: int
    bits: torch.Tensor        # (field_size, field_size) bool
    values: torch.Tensor      # (field_size, field_size) float64, before threshold
    threshold: float
    imag_peak: float          # max |imag| over the inverse output

    @property
    def size(self) -> int:
        return self.bits.shape[0]

    @property
    def value_range(self) -> Tuple[float, float]:
        return float(self.values.min()), float(self.values.max())

    @property
    def coverage(self) -> float:
        return float(self.bits.to(torch.float64).mean())


class TeaLeafGenerator(nn.Module):
    """
    Deterministic stencil generator.

    Every call allocates its own noise, tables and intermediate fields; the
    module only carries configuration.
    """
    def __init__(self, config: Optional[StencilConfig] = None):
        super().__init__()
        self.config = config or StencilConfig()
        c = self.config
        self.transform = SeparableTransform2D(c.fft_size, c.normalization)
        self.mask = FrequencyMask(c.fft_size, c.cutoff, c.boundary)

    @property
    def threshold(self) -> float:
        return self.config.threshold

    def noise(self, seed: int) -> torch.Tensor:
        c = self.config
        return random_binary_field(seed, c.field_size, c.fft_size, c.generator)

    @torch.no_grad()
    def spectrum(self, seed: int) -> torch.Tensor:
        """Masked forward spectrum of the noise for `seed`."""
        middle = self.transform(self.noise(seed), Direction.FORWARD)
        return self.mask(middle)

    @torch.no_grad()
    def forward(self, seed: int) -> StencilResult:
        c = self.config
        output = self.transform(self.spectrum(seed), Direction.INVERSE)
        values = output.real[: c.field_size, : c.field_size].clone()
        bits = threshold_field(values, self.threshold)
        result = StencilResult(
            seed=seed,
            bits=bits,
            values=values,
            threshold=self.threshold,
            imag_peak=float(output.imag.abs().max()),
        )
        lo, hi = result.value_range
        logger.debug(
            "seed=%d range=[%.3f, %.3f] threshold=%.1f coverage=%.4f",
            seed, lo, hi, result.threshold, result.coverage,
        )
        return result

    def from_query(self, query: str) -> StencilResult:
        seed = seed_from_query(query, self.config.seed_prefix)
        logger.debug("query=%r seed=%d", query, seed)
        return self(seed)

    def extra_repr(self) -> str:
        c = self.config
        return f"field_size={c.field_size}, fft_size={c.fft_size}, generator={c.generator}"
