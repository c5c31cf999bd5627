"""
Vector outline of a stencil: one rectangle subpath per horizontal run of set
cells, `M x y h run v 1 h -run Z`.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterator, Tuple

import numpy as np

from tealeaf.render.raster import _as_bool_array

FILL_HEX = "#5466f9"


def row_runs(bits) -> Iterator[Tuple[int, int, int]]:
    """Yield (y, x, run) for every maximal run of True cells, row by row."""
    arr = _as_bool_array(bits)
    for y, row in enumerate(arr):
        # run edges from the sign changes of the padded row
        edges = np.diff(np.concatenate(([0], row.astype(np.int8), [0])))
        starts = np.flatnonzero(edges == 1)
        stops = np.flatnonzero(edges == -1)
        for x0, x1 in zip(starts, stops):
            yield y, int(x0), int(x1 - x0)


def outline_path(bits) -> str:
    return " ".join(f"M {x} {y} h {run} v 1 h {-run} Z" for y, x, run in row_runs(bits))


def to_svg(bits, fill: str = FILL_HEX) -> str:
    arr = _as_bool_array(bits)
    h, w = arr.shape
    return (
        f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
        f'xmlns="http://www.w3.org/2000/svg" shape-rendering="crispEdges">'
        f'<rect width="{w}" height="{h}" fill="transparent"/>'
        f'<path d="{outline_path(arr)}" fill="{fill}"/>'
        f"</svg>"
    )


def save_svg(bits, path: str | Path, fill: str = FILL_HEX) -> Path:
    path = Path(path)
    path.write_text(to_svg(bits, fill), encoding="utf-8")
    return path
