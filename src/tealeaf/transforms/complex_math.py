# src/tealeaf/transforms/complex_math.py
from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Sequence, Union

import torch

DTYPE = torch.complex128


@dataclass(frozen=True)
class ComplexValue:
    """
    Immutable complex scalar (real, imag) in double precision.
    Arithmetic returns new values; equality for tests goes through isclose().
    """
    real: float = 0.0
    imag: float = 0.0

    def add(self, other: "ComplexValue") -> "ComplexValue":
        return ComplexValue(self.real + other.real, self.imag + other.imag)

    def subtract(self, other: "ComplexValue") -> "ComplexValue":
        return ComplexValue(self.real - other.real, self.imag - other.imag)

    def multiply(self, other: "ComplexValue") -> "ComplexValue":
        # (a+bi)(c+di) = (ac - bd) + (ad + bc)i
        return ComplexValue(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    def scale(self, s: float) -> "ComplexValue":
        return ComplexValue(self.real * s, self.imag * s)

    def conjugate(self) -> "ComplexValue":
        return ComplexValue(self.real, -self.imag)

    def isclose(self, other: "ComplexValue", tol: float = 1e-9) -> bool:
        return abs(self.real - other.real) <= tol and abs(self.imag - other.imag) <= tol

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    @classmethod
    def from_complex(cls, z: complex) -> "ComplexValue":
        z = complex(z)
        return cls(z.real, z.imag)


def add(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    return a.add(b)


def subtract(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    return a.subtract(b)


def multiply(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    return a.multiply(b)


def scale(a: ComplexValue, s: float) -> ComplexValue:
    return a.scale(s)


# ---------------------------------------------------------------------------
# Tensor counterparts: the same formulas applied component-wise.
# ---------------------------------------------------------------------------

def cadd(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.complex(a.real + b.real, a.imag + b.imag)


def csub(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.complex(a.real - b.real, a.imag - b.imag)


def cmul(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    ar, ai = a.real, a.imag
    br, bi = b.real, b.imag
    return torch.complex(ar * br - ai * bi, ar * bi + ai * br)


def cscale(a: torch.Tensor, s: float) -> torch.Tensor:
    return torch.complex(a.real * s, a.imag * s)


def unit_phasors(angles: torch.Tensor) -> torch.Tensor:
    """exp(i·angle) for a float64 tensor of angles."""
    return torch.complex(torch.cos(angles), torch.sin(angles))


ComplexLike = Union[torch.Tensor, Sequence]


def _to_pair(v) -> tuple[float, float]:
    if isinstance(v, ComplexValue):
        return v.real, v.imag
    if isinstance(v, Number):
        z = complex(v)
        return z.real, z.imag
    raise TypeError(f"cannot interpret {type(v).__name__} as a complex value")


def as_complex_tensor(values: ComplexLike) -> torch.Tensor:
    """
    Coerce a tensor or a (nested) sequence of ComplexValue / numbers into a
    complex128 tensor. Tensors already in complex128 are returned as-is.
    """
    if isinstance(values, torch.Tensor):
        if values.dtype == DTYPE:
            return values
        if values.is_complex():
            return values.to(DTYPE)
        return torch.complex(values.to(torch.float64), torch.zeros_like(values, dtype=torch.float64))

    def _walk(seq):
        if len(seq) and not isinstance(seq[0], (ComplexValue, Number)):
            return [_walk(s) for s in seq]
        return [_to_pair(v) for v in seq]

    pairs = torch.tensor(_walk(list(values)), dtype=torch.float64)
    if pairs.numel() == 0:
        return torch.zeros(0, dtype=DTYPE)
    return torch.complex(pairs[..., 0].contiguous(), pairs[..., 1].contiguous())


def to_values(t: torch.Tensor) -> list:
    """Inverse of as_complex_tensor: nested lists of ComplexValue."""
    t = as_complex_tensor(t)
    if t.dim() == 0:
        return ComplexValue(float(t.real), float(t.imag))
    re, im = t.real.tolist(), t.imag.tolist()

    def _zip(r, i):
        if isinstance(r, list):
            return [_zip(rr, ii) for rr, ii in zip(r, i)]
        return ComplexValue(r, i)

    return _zip(re, im)
