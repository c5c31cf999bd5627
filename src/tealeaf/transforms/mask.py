# src/tealeaf/transforms/mask.py
from __future__ import annotations

import torch
import torch.nn as nn

from tealeaf.config import MaskBoundaryMode, check_cutoff
from tealeaf.transforms.separable import check_field


def band_mask(n: int, cutoff: int, boundary: MaskBoundaryMode = MaskBoundaryMode.INCLUSIVE, device=None) -> torch.Tensor:
    """
    Boolean (n, n) tensor, True where a frequency cell gets zeroed:

        INCLUSIVE:  c <= row <= n-c  or  c <= col <= n-c
        EXCLUSIVE:  c <= row <  n-c  or  c <= col <  n-c

    Cells near the zero-frequency edges of both axes survive.
    """
    check_cutoff(cutoff, n)
    idx = torch.arange(n, device=device)
    if MaskBoundaryMode(boundary) is MaskBoundaryMode.INCLUSIVE:
        band = (idx >= cutoff) & (idx <= n - cutoff)
    else:
        band = (idx >= cutoff) & (idx < n - cutoff)
    return band.unsqueeze(1) | band.unsqueeze(0)


def apply_frequency_mask(
    field: torch.Tensor,
    cutoff: int,
    boundary: MaskBoundaryMode = MaskBoundaryMode.INCLUSIVE,
    *,
    inplace: bool = True,
) -> torch.Tensor:
    """Zero the band of `field` (in place by default); idempotent."""
    n = check_field(field)
    mask = band_mask(n, cutoff, boundary, device=field.device)
    if inplace:
        return field.masked_fill_(mask, 0)
    return field.masked_fill(mask, 0)


class FrequencyMask(nn.Module):
    def __init__(self, size: int, cutoff: int, boundary: MaskBoundaryMode = MaskBoundaryMode.INCLUSIVE):
        super().__init__()
        self.size = size
        self.cutoff = check_cutoff(cutoff, size)
        self.boundary = MaskBoundaryMode(boundary)

    def forward(self, field: torch.Tensor) -> torch.Tensor:
        check_field(field, self.size)
        return apply_frequency_mask(field, self.cutoff, self.boundary)

    def extra_repr(self) -> str:
        return f"size={self.size}, cutoff={self.cutoff}, boundary={self.boundary.value}"
