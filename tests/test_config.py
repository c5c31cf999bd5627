# tests/test_config.py
import pytest

from tealeaf.config import Direction, MaskBoundaryMode, NormalizationMode, StencilConfig
from tealeaf.errors import DimensionMismatch, InvalidCutoff, InvalidLength, TeaLeafError, UnknownGenerator
from tealeaf.generator import TeaLeafGenerator


def test_defaults():
    c = StencilConfig()
    assert (c.field_size, c.fft_size, c.cutoff) == (420, 420, 5)
    assert c.boundary is MaskBoundaryMode.INCLUSIVE
    assert c.normalization is NormalizationMode.UNNORMALIZED
    assert c.threshold == 88200.0


def test_string_modes_are_coerced():
    c = StencilConfig(field_size=8, cutoff=1, boundary="exclusive", normalization="normalized")
    assert c.boundary is MaskBoundaryMode.EXCLUSIVE
    assert c.normalization is NormalizationMode.NORMALIZED
    assert c.threshold == pytest.approx(0.5)


def test_padded_threshold_uses_field_size():
    c = StencilConfig(field_size=420, fft_size=512)
    assert c.threshold == 88200.0
    n = StencilConfig(field_size=420, fft_size=512, normalization="normalized")
    assert n.threshold == pytest.approx(88200.0 / 512 ** 2)


@pytest.mark.parametrize("kwargs,exc", [
    ({"field_size": 0}, InvalidLength),
    ({"field_size": 8, "fft_size": 4, "cutoff": 1}, DimensionMismatch),
    ({"field_size": 8, "cutoff": 5}, InvalidCutoff),
    ({"field_size": 8, "cutoff": -1}, InvalidCutoff),
    ({"field_size": 8, "cutoff": 1, "generator": "nope"}, UnknownGenerator),
])
def test_validation(kwargs, exc):
    with pytest.raises(exc) as info:
        StencilConfig(**kwargs)
    assert isinstance(info.value, TeaLeafError)
    assert isinstance(info.value, ValueError)


def test_cutoff_half_size_allowed():
    assert StencilConfig(field_size=9, cutoff=4).cutoff == 4
    assert StencilConfig(field_size=8, cutoff=4).cutoff == 4


def test_bad_mode_string():
    with pytest.raises(ValueError):
        StencilConfig(field_size=8, cutoff=1, boundary="sometimes")


def test_direction_sign():
    assert Direction.FORWARD.sign == -1
    assert Direction.INVERSE.sign == 1


def test_unknown_generator_rejected_before_first_stencil():
    with pytest.raises(UnknownGenerator) as info:
        TeaLeafGenerator(StencilConfig(field_size=8, cutoff=1, generator="xorshift"))
    assert info.value.code == "UNKNOWN_GENERATOR"
    assert "mulberry32" in info.value.message
    assert StencilConfig(field_size=8, cutoff=1, generator="mulberry32").generator == "mulberry32"
