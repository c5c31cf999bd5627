from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
import torch
from PIL import Image

FILL_RGBA: Tuple[int, int, int, int] = (0x54, 0x66, 0xF9, 255)      # #5466f9
BACKGROUND_RGBA: Tuple[int, int, int, int] = (255, 255, 255, 0)     # transparent white


def _as_bool_array(bits) -> np.ndarray:
    if isinstance(bits, torch.Tensor):
        bits = bits.detach().cpu().numpy()
    arr = np.asarray(bits, dtype=bool)
    if arr.ndim != 2:
        raise ValueError(f"stencil must be 2D, got shape {arr.shape}")
    return arr


def to_rgba(
    bits,
    fill: Tuple[int, int, int, int] = FILL_RGBA,
    background: Tuple[int, int, int, int] = BACKGROUND_RGBA,
) -> np.ndarray:
    """(H, W) bool stencil → (H, W, 4) uint8 RGBA."""
    arr = _as_bool_array(bits)
    out = np.empty(arr.shape + (4,), dtype=np.uint8)
    out[...] = np.asarray(background, dtype=np.uint8)
    out[arr] = np.asarray(fill, dtype=np.uint8)
    return out


def save_png(bits, path: str | Path, **kwargs) -> Path:
    path = Path(path)
    Image.fromarray(to_rgba(bits, **kwargs)).save(path)
    return path
