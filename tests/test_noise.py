# tests/test_noise.py
import pytest
import torch

from tealeaf.errors import DimensionMismatch, TeaLeafError
from tealeaf.noise.field import random_binary_field
from tealeaf.noise.rng import CRandGenerator, Mulberry32, bit_stream, make_generator
from tealeaf.noise.seed import seed_from_query, seed_from_string


def test_lcg_matches_c_rand_sequence():
    rng = CRandGenerator(1)
    assert [rng.next_int() for _ in range(10)] == [
        16838, 5758, 10113, 17515, 31051, 5627, 23010, 7419, 16212, 4086,
    ]


def test_lcg_bits():
    assert list(bit_stream(825, 16, "lcg")) == [0, 1, 1, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1, 0, 0, 1]


def test_mulberry32_floats():
    rng = Mulberry32(12345)
    expected = [0.97972826776094735, 0.30675226449966431, 0.48420542152598500,
                0.81793441250920296, 0.50942836934700608]
    assert [rng.next_float() for _ in range(5)] == pytest.approx(expected, abs=1e-16)


def test_mulberry32_raw_and_bits():
    rng = Mulberry32(0)
    assert [round(rng.next_float() * 4294967296) for _ in range(3)] == [1144304738, 1416247, 958946056]
    assert list(bit_stream(12345, 16, "mulberry32")) == [1, 0, 0, 1, 1, 0, 0, 1, 1, 1, 0, 1, 1, 1, 1, 0]


def test_unknown_generator():
    with pytest.raises(TeaLeafError, match="unknown noise generator"):
        make_generator("xorshift", 1)


@pytest.mark.parametrize("text,seed", [
    ("", 0),
    ("tealeaf::", 838),
    ("tealeaf::?name=alice", 1889),
    ("tealeaf::é€", 9435),
])
def test_seed_from_string(text, seed):
    assert seed_from_string(text) == seed


def test_seed_wraps_to_32_bits():
    assert seed_from_string("\uffff" * 65538) == 65534


def test_seed_from_query_keeps_query_verbatim():
    assert seed_from_query("?name=alice") == 1889
    assert seed_from_query("") == seed_from_query(None) == 838
    assert seed_from_query("x", prefix="") == ord("x")


def test_binary_field_layout():
    f = random_binary_field(838, 6)
    assert f.shape == (6, 6) and f.dtype == torch.complex128
    assert torch.equal(f.imag, torch.zeros(6, 6, dtype=torch.float64))
    bits = list(bit_stream(838, 36))
    assert f.real.flatten().tolist() == [float(b) for b in bits]


def test_binary_field_zero_padding():
    f = random_binary_field(7, 5, fft_size=8, generator="mulberry32")
    assert f.shape == (8, 8)
    assert f.real[5:, :].abs().sum() == 0
    assert f.real[:, 5:].abs().sum() == 0
    assert torch.equal(f.real[:5, :5], random_binary_field(7, 5, generator="mulberry32").real)


def test_binary_field_deterministic():
    assert torch.equal(random_binary_field(42, 32), random_binary_field(42, 32))
    assert not torch.equal(random_binary_field(42, 32), random_binary_field(43, 32))


def test_padding_smaller_than_field():
    with pytest.raises(DimensionMismatch):
        random_binary_field(1, 8, fft_size=4)
