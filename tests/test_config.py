import hashlib

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ecvrf.config import INFINITY, P256, SECP256K1, Config, Curve, Point


def test_generator_on_curve():
    assert SECP256K1.is_on_curve(SECP256K1.generator)
    assert P256.is_on_curve(P256.generator)


def test_infinity_not_on_curve():
    assert not SECP256K1.is_on_curve(INFINITY)
    assert not P256.is_on_curve(Point(P256.gx, P256.gy + 1))


def test_order_times_generator_is_infinity():
    assert SECP256K1.scalar_base_mult(SECP256K1.n) == INFINITY
    assert SECP256K1.scalar_base_mult(0) == INFINITY
    assert P256.scalar_base_mult(P256.n) == INFINITY
    assert P256.scalar_base_mult(0) == INFINITY


def test_order_minus_one_is_negation():
    g = SECP256K1.generator
    assert SECP256K1.scalar_base_mult(SECP256K1.n - 1) == Point(g.x, SECP256K1.p - g.y)
    h = P256.generator
    assert P256.scalar_base_mult(P256.n - 1) == Point(h.x, P256.p - h.y)


def test_doubling_matches_addition():
    g = SECP256K1.generator
    assert SECP256K1.scalar_mult(g, 2) == SECP256K1.add(g, g)
    assert SECP256K1.scalar_mult(g, 3) == SECP256K1.add(SECP256K1.add(g, g), g)
    h = P256.generator
    assert P256.scalar_mult(h, 2) == P256.add(h, h)
    assert P256.scalar_mult(h, 3) == P256.add(P256.add(h, h), h)


def test_add_identity_and_inverse():
    g = SECP256K1.generator
    assert SECP256K1.add(g, INFINITY) == g
    assert SECP256K1.add(INFINITY, g) == g
    assert SECP256K1.add(g, Point(g.x, SECP256K1.p - g.y)) == INFINITY
    h = P256.generator
    assert P256.add(h, INFINITY) == h
    assert P256.add(INFINITY, h) == h
    assert P256.add(h, Point(h.x, P256.p - h.y)) == INFINITY


def test_add_commutative():
    a = SECP256K1.scalar_base_mult(12345)
    b = SECP256K1.scalar_base_mult(67890)
    assert SECP256K1.add(a, b) == SECP256K1.add(b, a)
    assert SECP256K1.is_on_curve(SECP256K1.add(a, b))
    c = P256.scalar_base_mult(12345)
    d = P256.scalar_base_mult(67890)
    assert P256.add(c, d) == P256.add(d, c)
    assert P256.is_on_curve(P256.add(c, d))


@settings(max_examples=10, deadline=None)
@given(
    st.integers(min_value=1, max_value=2**256),
    st.integers(min_value=1, max_value=2**256),
)
def test_scalar_mult_linear(a, b):
    assert SECP256K1.scalar_base_mult(a + b) == SECP256K1.add(
        SECP256K1.scalar_base_mult(a), SECP256K1.scalar_base_mult(b)
    )
    assert P256.scalar_base_mult(a + b) == P256.add(
        P256.scalar_base_mult(a), P256.scalar_base_mult(b)
    )


def test_negative_scalar():
    g = SECP256K1.generator
    assert SECP256K1.scalar_mult(g, -1) == Point(g.x, SECP256K1.p - g.y)


def test_generator_compressed_bytes():
    assert SECP256K1.marshal_compressed(SECP256K1.generator).hex() == (
        "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    )
    assert P256.marshal_compressed(P256.generator).hex() == (
        "036b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296"
    )


@settings(max_examples=10, deadline=None)
@given(st.integers(min_value=1, max_value=2**200))
def test_marshal_roundtrip(k):
    point = SECP256K1.scalar_base_mult(k)
    data = SECP256K1.marshal_compressed(point)
    assert len(data) == 33
    assert SECP256K1.unmarshal_compressed(data) == point
    other = P256.scalar_base_mult(k)
    other_data = P256.marshal_compressed(other)
    assert len(other_data) == 33
    assert P256.unmarshal_compressed(other_data) == other


def test_unmarshal_rejects_bad_input():
    good = SECP256K1.marshal_compressed(SECP256K1.generator)
    assert SECP256K1.unmarshal_compressed(b"\x04" + good[1:]) is None
    assert SECP256K1.unmarshal_compressed(good[:-1]) is None
    assert SECP256K1.unmarshal_compressed(good + b"\x00") is None
    assert SECP256K1.unmarshal_compressed(b"\x02" + SECP256K1.p.to_bytes(32, "big")) is None
    good = P256.marshal_compressed(P256.generator)
    assert P256.unmarshal_compressed(b"\x04" + good[1:]) is None
    assert P256.unmarshal_compressed(good[:-1]) is None
    assert P256.unmarshal_compressed(good + b"\x00") is None
    assert P256.unmarshal_compressed(b"\x02" + P256.p.to_bytes(32, "big")) is None


def test_unmarshal_results_are_valid_or_none():
    candidates = [b"\x03" + x.to_bytes(32, "big") for x in range(1, 60)]

    secp_results = [SECP256K1.unmarshal_compressed(data) for data in candidates]
    secp_valid = [pt for pt in secp_results if pt is not None]
    assert all(SECP256K1.is_on_curve(pt) and pt.y & 1 == 1 for pt in secp_valid)
    assert 0 < len(secp_valid) < len(secp_results)

    p256_results = [P256.unmarshal_compressed(data) for data in candidates]
    p256_valid = [pt for pt in p256_results if pt is not None]
    assert all(P256.is_on_curve(pt) and pt.y & 1 == 1 for pt in p256_valid)
    assert 0 < len(p256_valid) < len(p256_results)


def test_config_defaults():
    cfg = Config(SECP256K1, 0xFE)
    assert cfg.cofactor == 1
    assert cfg.new_hasher().name == hashlib.sha256().name
    data = SECP256K1.marshal_compressed(SECP256K1.generator)
    assert cfg.decompress(SECP256K1, data) == SECP256K1.generator


@pytest.mark.parametrize("suite, cofactor", [(0, 1), (256, 1), (1, 0), (1, 256)])
def test_config_rejects_bad_octets(suite, cofactor):
    with pytest.raises(ValueError):
        Config(P256, suite, cofactor)


def test_custom_curve_fields():
    curve = Curve("tiny", 23, 1, 1, 3, 10, 28)
    assert curve.is_on_curve(curve.generator)
    assert curve.byte_len == 1