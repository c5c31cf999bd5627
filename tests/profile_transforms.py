import time

import torch

from tealeaf.config import Direction, StencilConfig
from tealeaf.generator import TeaLeafGenerator
from tealeaf.transforms.separable import transform2d


def time_transform(n):
    g = torch.Generator().manual_seed(0)
    field = torch.randn(n, n, dtype=torch.complex128, generator=g)
    # Warmup
    for _ in range(2): _ = transform2d(field, Direction.FORWARD)
    t0 = time.time()
    _ = transform2d(field, Direction.FORWARD)
    return time.time() - t0


for n in [64, 128, 256, 420, 512]:
    t = time_transform(n)
    print(f"N={n:4d} → {t*1000:.2f} ms")

gen = TeaLeafGenerator(StencilConfig())
t0 = time.time()
res = gen.from_query("")
print(f"full stencil 420: {(time.time() - t0)*1000:.2f} ms, coverage={res.coverage:.3f}")
