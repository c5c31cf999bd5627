# tests/test_separable.py
import pytest
import torch

from tealeaf.config import Direction, NormalizationMode
from tealeaf.errors import DimensionMismatch
from tealeaf.transforms.separable import (
    GeneralPath,
    PowerOfTwoPath,
    SeparableTransform2D,
    select_path,
    transform1d,
    transform2d,
)


def _field(n, seed=0):
    g = torch.Generator().manual_seed(seed)
    return torch.randn(n, n, dtype=torch.complex128, generator=g)


def test_path_selection():
    assert select_path(512) == PowerOfTwoPath(512)
    assert select_path(1) == PowerOfTwoPath(1)
    assert select_path(420) == GeneralPath(420, 1024)
    assert select_path(5) == GeneralPath(5, 16)


@pytest.mark.parametrize("n", [1, 2, 5, 8, 12, 31, 64])
def test_forward_matches_fft2(n):
    f = _field(n, seed=n)
    torch.testing.assert_close(transform2d(f, Direction.FORWARD), torch.fft.fft2(f), rtol=1e-9, atol=1e-9)


@pytest.mark.parametrize("n", [2, 3, 16, 20, 33, 420, 512])
def test_round_trip_scales_by_n_squared(n):
    f = _field(n, seed=100 + n)
    back = transform2d(transform2d(f, Direction.FORWARD), Direction.INVERSE)
    expected = f * (n * n)
    err = (back - expected).abs().max() / expected.abs().max()
    assert err < 1e-9


def test_round_trip_normalized():
    f = _field(24, seed=1)
    back = transform2d(
        transform2d(f, Direction.FORWARD, normalization=NormalizationMode.NORMALIZED),
        Direction.INVERSE,
        normalization=NormalizationMode.NORMALIZED,
    )
    torch.testing.assert_close(back, f, rtol=1e-9, atol=1e-9)


@pytest.mark.parametrize("n", [8, 10])
def test_rows_before_columns_equals_columns_before_rows(n):
    # separability: the two orders agree up to rounding
    f = _field(n, seed=3)
    rows_first = transform2d(f)
    cols_first = transform1d(transform1d(f.T).T)
    torch.testing.assert_close(rows_first, cols_first, rtol=1e-9, atol=1e-9)


@pytest.mark.parametrize("shape", [(4, 5), (4,), (2, 2, 2)])
def test_non_square_rejected(shape):
    with pytest.raises(DimensionMismatch):
        transform2d(torch.zeros(shape, dtype=torch.complex128))


def test_module_enforces_size():
    stage = SeparableTransform2D(16)
    assert isinstance(stage.path, PowerOfTwoPath)
    out = stage(_field(16), Direction.FORWARD)
    assert out.shape == (16, 16)
    with pytest.raises(DimensionMismatch) as exc:
        stage(_field(15))
    assert exc.value.expected == (16, 16)
    assert exc.value.actual == (15, 15)


def test_input_field_untouched():
    f = _field(12, seed=5)
    before = f.clone()
    transform2d(f, Direction.FORWARD)
    assert torch.equal(f, before)
