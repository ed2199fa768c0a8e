"""Elliptic curve verifiable random function: proving, verifying and evaluating."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass, field
from typing import Tuple

from .config import P256, SECP256K1, Config, Curve, Point
from .core import Core, VrfError

__all__ = [
    "PublicKey",
    "PrivateKey",
    "Vrf",
    "VrfError",
    "new",
    "SECP256K1_SHA256_TAI",
    "P256_SHA256_TAI",
]


@dataclass(frozen=True)
class PublicKey:
    """A public key: a point on ``curve``."""

    curve: Curve
    x: int
    y: int

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class PrivateKey:
    """A private scalar ``d`` together with its public key ``d * G``."""

    curve: Curve
    d: int
    public_key: PublicKey = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0 < self.d < self.curve.n:
            raise ValueError("private scalar out of range")
        point = self.curve.scalar_base_mult(self.d)
        object.__setattr__(self, "public_key", PublicKey(self.curve, point.x, point.y))

    @property
    def point(self) -> Point:
        return self.public_key.point

    @classmethod
    def from_bytes(cls, curve: Curve, data: bytes) -> "PrivateKey":
        """Build a key from big-endian bytes, reduced modulo the group order."""
        d = int.from_bytes(data, "big") % curve.n
        if d == 0:
            raise ValueError("private scalar must not be zero")
        return cls(curve, d)

    @classmethod
    def generate(cls, curve: Curve) -> "PrivateKey":
        """Generate a random key on ``curve``."""
        return cls(curve, secrets.randbelow(curve.n - 1) + 1)


@dataclass(frozen=True)
class Vrf:
    """A VRF for one ciphersuite."""

    config: Config

    def _core(self) -> Core:
        return Core(self.config)

    def prove(self, sk: PrivateKey, alpha: bytes) -> Tuple[bytes, bytes]:
        """Construct a proof for ``alpha``; return ``(beta, pi)``."""
        core = self._core()
        q = core.q()
        h = core.hash_to_curve_try_and_increment(sk.point, alpha)
        h_bytes = core.marshal(h)
        gamma = core.scalar_mult(h, sk.d)
        k_bytes = core.rfc6979_nonce(sk.d, h_bytes)
        k = int.from_bytes(k_bytes, "big")
        c = core.hash_points(
            h,
            gamma,
            core.scalar_base_mult(k_bytes),
            core.scalar_mult(h, k_bytes),
        )
        s = (k + c * sk.d) % q
        pi = core.encode_proof(gamma, c, s)
        return core.gamma_to_hash(gamma), pi

    def eval(self, sk: PrivateKey, alpha: bytes) -> bytes:
        """Compute the VRF output ``beta`` for ``alpha`` without a proof."""
        core = self._core()
        h = core.hash_to_curve_try_and_increment(sk.point, alpha)
        return core.gamma_to_hash(core.scalar_mult(h, sk.d))

    def verify(self, pk: PublicKey, alpha: bytes, pi: bytes) -> bytes:
        """Check proof ``pi`` of ``alpha`` against ``pk``; return ``beta``.

        Raises VrfError when the proof is malformed or does not hold.
        """
        core = self._core()
        gamma, c, s = core.decode_proof(pi)
        y = pk.point
        h = core.hash_to_curve_try_and_increment(y, alpha)
        u = core.sub(core.scalar_base_mult(s), core.scalar_mult(y, c))
        v = core.sub(core.scalar_mult(h, s), core.scalar_mult(gamma, c))
        if core.hash_points(h, gamma, u, v) != c:
            raise VrfError("invalid proof")
        return core.gamma_to_hash(gamma)


def new(config: Config) -> Vrf:
    """Create a VRF for a custom ciphersuite."""
    return Vrf(config)


SECP256K1_SHA256_TAI = new(
    Config(curve=SECP256K1, suite_string=0xFE, cofactor=0x01, new_hasher=hashlib.sha256)
)

P256_SHA256_TAI = new(
    Config(curve=P256, suite_string=0x01, cofactor=0x01, new_hasher=hashlib.sha256)
)