"""ECVRF building blocks: hashing to the curve, proofs and nonces."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .config import SECP256K1, Config, Curve, Point

Scalar = Union[int, bytes]


class VrfError(ValueError):
    """Raised when a proof or a VRF input is invalid."""


def bits2int(data: bytes, qlen: int) -> int:
    """Convert a bit string to an integer, keeping its leftmost ``qlen`` bits."""
    out = int.from_bytes(data, "big")
    inlen = len(data) * 8
    if inlen > qlen:
        out >>= inlen - qlen
    return out


def int2octets(v: int, rolen: int) -> bytes:
    """Encode ``v`` in exactly ``rolen`` big-endian octets."""
    return (abs(v) % (1 << (8 * rolen))).to_bytes(rolen, "big")


def bits2octets(data: bytes, q: int, rolen: int) -> bytes:
    """Convert a bit string to an octet string reduced modulo ``q``."""
    z1 = bits2int(data, q.bit_length())
    z2 = z1 - q
    return int2octets(z1 if z2 < 0 else z2, rolen)


def _hmac_sha256(key: bytes, message: bytes) -> bytes:
    return hmac.digest(key, message, "sha256")


def _nonce_rfc6979(priv_key: bytes, digest: bytes) -> bytes:
    """Deterministic nonce per RFC 6979 with HMAC-SHA256, bounded by the secp256k1 order."""
    key = priv_key[:32].rjust(32, b"\x00") + digest[:32].rjust(32, b"\x00")
    k = bytes(32)
    v = b"\x01" * 32
    k = _hmac_sha256(k, v + b"\x00" + key)
    v = _hmac_sha256(k, v)
    k = _hmac_sha256(k, v + b"\x01" + key)
    v = _hmac_sha256(k, v)
    while True:
        v = _hmac_sha256(k, v)
        candidate = int.from_bytes(v, "big")
        if 0 < candidate < SECP256K1.n:
            return v
        k = _hmac_sha256(k, v + b"\x00")
        v = _hmac_sha256(k, v)


def _scalar(k: Scalar) -> int:
    return int.from_bytes(k, "big") if isinstance(k, (bytes, bytearray)) else k


@dataclass
class Core:
    """Curve and hash operations of one ECVRF ciphersuite."""

    config: Config

    @property
    def curve(self) -> Curve:
        return self.config.curve

    def q(self) -> int:
        """Prime order of the large prime-order subgroup."""
        return self.curve.n

    def n(self) -> int:
        """Half the field element length in octets, rounded up to an even bit count."""
        return ((self.curve.p.bit_length() + 1) // 2 + 7) // 8

    def _hash(self, *parts: bytes) -> bytes:
        hasher = self.config.new_hasher()
        for part in parts:
            hasher.update(part)
        return hasher.digest()

    def marshal(self, point: Point) -> bytes:
        """point_to_string: the compressed encoding of ``point``."""
        return self.curve.marshal_compressed(point)

    def unmarshal(self, data: bytes) -> Optional[Point]:
        """string_to_point: decode a compressed point, or None if invalid."""
        return self.config.decompress(self.curve, bytes(data))

    def scalar_mult(self, point: Point, k: Scalar) -> Point:
        return self.curve.scalar_mult(point, _scalar(k))

    def scalar_base_mult(self, k: Scalar) -> Point:
        return self.curve.scalar_base_mult(_scalar(k))

    def add(self, p1: Point, p2: Point) -> Point:
        return self.curve.add(p1, p2)

    def sub(self, p1: Point, p2: Point) -> Point:
        if p2.is_infinity:
            return p1
        return self.curve.add(p1, Point(p2.x, (-p2.y) % self.curve.p))

    def hash_to_curve_try_and_increment(self, pk: Point, alpha: bytes) -> Point:
        """Map ``alpha`` to a curve point with the try-and-increment method."""
        pk_bytes = self.marshal(pk)
        prefix = bytes([self.config.suite_string, 0x01])
        for ctr in range(256):
            digest = self._hash(prefix, pk_bytes, bytes(alpha), bytes([ctr]))
            point = self.unmarshal(b"\x02" + digest)
            if point is not None:
                if self.config.cofactor > 1:
                    point = self.scalar_mult(point, self.config.cofactor)
                return point
        raise VrfError("no valid point found")

    def hash_points(self, *args: Point) -> int:
        """Hash a sequence of points to an integer of ``n()`` octets."""
        digest = self._hash(
            bytes([self.config.suite_string, 0x02]),
            *(self.marshal(point) for point in args),
        )
        return bits2int(digest, self.n() * 8)

    def gamma_to_hash(self, gamma: Point) -> bytes:
        """Derive the VRF output beta from gamma."""
        gamma_cof = gamma
        if self.config.cofactor != 1:
            gamma_cof = self.scalar_mult(gamma, self.config.cofactor)
        return self._hash(bytes([self.config.suite_string, 0x03]), self.marshal(gamma_cof))

    def _scalar_len(self) -> int:
        return (self.q().bit_length() + 7) // 8

    def encode_proof(self, gamma: Point, c: int, s: int) -> bytes:
        return self.marshal(gamma) + int2octets(c, self.n()) + int2octets(s, self._scalar_len())

    def decode_proof(self, pi: bytes) -> Tuple[Point, int, int]:
        """Split a proof into (gamma, c, s); raise VrfError if it is malformed."""
        ptlen = (self.curve.bit_size + 7) // 8 + 1
        clen = self.n()
        slen = self._scalar_len()
        if len(pi) != ptlen + clen + slen:
            raise VrfError("invalid proof length")
        gamma = self.unmarshal(pi[:ptlen])
        if gamma is None:
            raise VrfError("invalid point")
        c = int.from_bytes(pi[ptlen : ptlen + clen], "big")
        s = int.from_bytes(pi[ptlen + clen :], "big")
        return gamma, c, s

    def rfc6979_nonce(self, sk: int, m: bytes) -> bytes:
        """Generate the deterministic nonce for secret key ``sk`` and message ``m``."""
        q = self.q()
        rolen = (q.bit_length() + 7) // 8
        bx = int2octets(sk, rolen)
        bh = bits2octets(self._hash(bytes(m)), q, rolen)
        return _nonce_rfc6979(bx, bh)