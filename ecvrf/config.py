"""Elliptic curve arithmetic and VRF ciphersuite parameters."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

_Jacobian = Tuple[int, int, int]


@dataclass(frozen=True)
class Point:
    """An affine curve point; (0, 0) stands for the point at infinity."""

    x: int
    y: int

    @property
    def is_infinity(self) -> bool:
        return self.x == 0 and self.y == 0


INFINITY = Point(0, 0)


def _sqrt_mod(value: int, p: int) -> Optional[int]:
    """Return a square root of ``value`` modulo the odd prime ``p``, or None."""
    value %= p
    if value == 0:
        return 0
    if pow(value, (p - 1) // 2, p) != 1:
        return None
    if p % 4 == 3:
        return pow(value, (p + 1) // 4, p)
    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1
    m, c, t, r = s, pow(z, q, p), pow(value, q, p), pow(value, (q + 1) // 2, p)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m, c, t, r = i, b * b % p, t * b * b % p, r * b % p
    return r


@dataclass(frozen=True)
class Curve:
    """A short Weierstrass curve y^2 = x^3 + a*x + b over a prime field."""

    name: str
    p: int
    a: int
    b: int
    gx: int
    gy: int
    n: int

    @property
    def bit_size(self) -> int:
        return self.p.bit_length()

    @property
    def byte_len(self) -> int:
        return (self.bit_size + 7) // 8

    @property
    def generator(self) -> Point:
        return Point(self.gx, self.gy)

    def is_on_curve(self, point: Point) -> bool:
        """Tell whether ``point`` is a finite point of this curve."""
        x, y, p = point.x, point.y, self.p
        if not (0 <= x < p and 0 <= y < p):
            return False
        return (y * y - (x * x * x + self.a * x + self.b)) % p == 0

    def _negate(self, point: Point) -> Point:
        if point.is_infinity:
            return point
        return Point(point.x, (-point.y) % self.p)

    def add(self, p1: Point, p2: Point) -> Point:
        """Return the sum of two points."""
        return self._to_affine(self._jacobian_add(self._to_jacobian(p1), self._to_jacobian(p2)))

    def scalar_mult(self, point: Point, k: int) -> Point:
        """Return ``k`` times ``point``."""
        if k < 0:
            return self.scalar_mult(self._negate(point), -k)
        result: _Jacobian = (1, 1, 0)
        addend = self._to_jacobian(point)
        for bit in bin(k)[2:]:
            result = self._jacobian_double(result)
            if bit == "1":
                result = self._jacobian_add(result, addend)
        return self._to_affine(result)

    def scalar_base_mult(self, k: int) -> Point:
        """Return ``k`` times the generator."""
        return self.scalar_mult(self.generator, k)

    def marshal_compressed(self, point: Point) -> bytes:
        """Encode a point in the compressed form of ANSI X9.62 section 4.3.6."""
        return bytes([2 | (point.y & 1)]) + point.x.to_bytes(self.byte_len, "big")

    def unmarshal_compressed(self, data: bytes) -> Optional[Point]:
        """Decode a compressed point; return None when it is not a valid point."""
        if len(data) != 1 + self.byte_len or data[0] not in (2, 3):
            return None
        x = int.from_bytes(data[1:], "big")
        if x >= self.p:
            return None
        y = _sqrt_mod(x * x * x + self.a * x + self.b, self.p)
        if y is None:
            return None
        if (y & 1) != (data[0] & 1):
            y = (-y) % self.p
        return Point(x, y)

    def _to_jacobian(self, point: Point) -> _Jacobian:
        if point.is_infinity:
            return (1, 1, 0)
        return (point.x, point.y, 1)

    def _to_affine(self, point: _Jacobian) -> Point:
        x, y, z = point
        if z % self.p == 0:
            return INFINITY
        p = self.p
        z_inv = pow(z, -1, p)
        z_inv2 = z_inv * z_inv % p
        return Point(x * z_inv2 % p, y * z_inv2 * z_inv % p)

    def _jacobian_double(self, point: _Jacobian) -> _Jacobian:
        x, y, z = point
        p = self.p
        if z == 0 or y == 0:
            return (1, 1, 0)
        yy = y * y % p
        zz = z * z % p
        s = 4 * x * yy % p
        m = (3 * x * x + self.a * zz * zz) % p
        x3 = (m * m - 2 * s) % p
        y3 = (m * (s - x3) - 8 * yy * yy) % p
        z3 = 2 * y * z % p
        return (x3, y3, z3)

    def _jacobian_add(self, p1: _Jacobian, p2: _Jacobian) -> _Jacobian:
        x1, y1, z1 = p1
        x2, y2, z2 = p2
        if z1 == 0:
            return p2
        if z2 == 0:
            return p1
        p = self.p
        z1z1 = z1 * z1 % p
        z2z2 = z2 * z2 % p
        u1 = x1 * z2z2 % p
        u2 = x2 * z1z1 % p
        s1 = y1 * z2 * z2z2 % p
        s2 = y2 * z1 * z1z1 % p
        if u1 == u2:
            if s1 != s2:
                return (1, 1, 0)
            return self._jacobian_double(p1)
        h = (u2 - u1) % p
        r = (s2 - s1) % p
        hh = h * h % p
        hhh = h * hh % p
        u1hh = u1 * hh % p
        x3 = (r * r - hhh - 2 * u1hh) % p
        y3 = (r * (u1hh - x3) - s1 * hhh) % p
        z3 = h * z1 * z2 % p
        return (x3, y3, z3)


SECP256K1 = Curve(
    name="secp256k1",
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
)

P256 = Curve(
    name="P-256",
    p=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    a=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    b=0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    gx=0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
    gy=0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
    n=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
)


@dataclass(frozen=True)
class Config:
    """Parameters of an ECVRF ciphersuite."""

    curve: Curve
    suite_string: int
    cofactor: int = 1
    new_hasher: Callable[[], Any] = hashlib.sha256
    decompress: Callable[[Curve, bytes], Optional[Point]] = Curve.unmarshal_compressed

    def __post_init__(self) -> None:
        if not 1 <= self.suite_string <= 0xFF:
            raise ValueError("suite_string must be a single nonzero octet")
        if not 1 <= self.cofactor <= 0xFF:
            raise ValueError("cofactor must be a single nonzero octet")