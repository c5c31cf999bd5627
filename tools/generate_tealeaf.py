#!/usr/bin/env python3
"""
Generate a tea-leaf stencil from a query string (or an explicit seed) and
write it out as PNG, SVG and/or the raw pre-threshold values.

Usage:
  python tools/generate_tealeaf.py \
      --query "name=alice" \
      --size 420 \
      --cutoff 5 \
      --png out/tealeaf.png \
      --svg out/tealeaf.svg

Set TEALEAF_LOG_LEVEL=DEBUG for transform/path diagnostics.
"""
from __future__ import annotations

import argparse
import logging
import os
import pathlib
import sys
import time

import numpy as np

from tealeaf.config import MaskBoundaryMode, NormalizationMode, StencilConfig
from tealeaf.errors import TeaLeafError
from tealeaf.generator import TeaLeafGenerator
from tealeaf.noise.rng import GENERATORS
from tealeaf.render.raster import save_png
from tealeaf.render.svg import save_svg


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a deterministic tea-leaf stencil.")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--query", type=str, default="", help="Request string hashed into the seed.")
    src.add_argument("--seed", type=int, default=None, help="Explicit 32-bit seed (skips hashing).")
    p.add_argument("--size", type=int, default=420, help="Stencil side in pixels.")
    p.add_argument("--fft_size", type=int, default=None, help="Transform side; > size zero-pads the noise.")
    p.add_argument("--cutoff", type=int, default=5, help="Frequency band cutoff, 0..fft_size/2.")
    p.add_argument("--boundary", choices=[m.value for m in MaskBoundaryMode], default="inclusive")
    p.add_argument("--normalization", choices=[m.value for m in NormalizationMode], default="unnormalized")
    p.add_argument("--rng", choices=sorted(GENERATORS), default="lcg", help="Noise generator.")
    p.add_argument("--prefix", type=str, default="tealeaf::", help="Seed prefix for --query.")
    p.add_argument("--png", type=str, default=None, help="Output PNG path.")
    p.add_argument("--svg", type=str, default=None, help="Output SVG path.")
    p.add_argument("--npy", type=str, default=None, help="Output .npy path for pre-threshold values.")
    return p.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(
        level=os.getenv("TEALEAF_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)

    try:
        config = StencilConfig(
            field_size=args.size,
            fft_size=args.fft_size,
            cutoff=args.cutoff,
            boundary=args.boundary,
            normalization=args.normalization,
            generator=args.rng,
            seed_prefix=args.prefix,
        )
        gen = TeaLeafGenerator(config)
        print(f"⚙  size={config.field_size} fft={config.fft_size} cutoff={config.cutoff} "
              f"path={type(gen.transform.path).__name__}")

        t0 = time.time()
        result = gen(args.seed) if args.seed is not None else gen.from_query(args.query)
        dt = time.time() - t0
    except TeaLeafError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 2

    lo, hi = result.value_range
    print(f"🌱 seed={result.seed} range=[{lo:.1f}, {hi:.1f}] threshold={result.threshold:g} "
          f"coverage={result.coverage:.3f} ({dt * 1000:.0f} ms)")

    if args.png:
        print(f"💾 PNG → {save_png(result.bits, args.png)}")
    if args.svg:
        print(f"💾 SVG → {save_svg(result.bits, args.svg)}")
    if args.npy:
        out = pathlib.Path(args.npy)
        np.save(out, result.values.numpy())
        print(f"💾 values → {out}")
    print("✅ Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
