# ecvrf

An Elliptic Curve Verifiable Random Function (ECVRF) in pure Python. It follows
the try-and-increment hash-to-curve construction of the IETF VRF draft and
derives its nonces as RFC 6979 describes, with HMAC-SHA256. It has no runtime
dependencies.

## Installation

```
pip install ecvrf
```

## Ready-made suites

`ecvrf.vrf` provides two configured VRFs:

- `SECP256K1_SHA256_TAI`: secp256k1 with SHA-256, suite string `0xfe`
- `P256_SHA256_TAI`: NIST P-256 with SHA-256, suite string `0x01`

The curves themselves are `ecvrf.config.SECP256K1` and `ecvrf.config.P256`.

## Usage

```python
from ecvrf.config import SECP256K1
from ecvrf.vrf import SECP256K1_SHA256_TAI, PrivateKey

vrf = SECP256K1_SHA256_TAI

sk = PrivateKey.generate(SECP256K1)
beta, pi = vrf.prove(sk, b"sample")

# verify recomputes beta from the proof. It raises VrfError
# when the proof does not match the message or the key.
assert vrf.verify(sk.public_key, b"sample", pi) == beta

# eval gives the same output without building a proof.
assert vrf.eval(sk, b"sample") == beta
```

`prove` returns the pair `(beta, pi)`:

- `beta` is the hash output.
- `pi` is the proof: the compressed Gamma point, then `c`, then `s`.

### Keys

- `PrivateKey(curve, d)` takes the private scalar and computes its
  `public_key`. It raises `ValueError` unless `0 < d < curve.n`.
- `PrivateKey.from_bytes(curve, data)` reads big-endian bytes and reduces them
  modulo the group order; a result of zero raises `ValueError`.
- `PrivateKey.generate(curve)` picks a random scalar with `secrets`.
- `PublicKey(curve, x, y)` holds a public point.

### Custom suites

`ecvrf.config.Config` holds the parameters of a suite: `curve`,
`suite_string`, `cofactor` (default 1), `new_hasher` (default
`hashlib.sha256`) and `decompress` (default `Curve.unmarshal_compressed`).
`suite_string` and `cofactor` must each be a single nonzero octet, otherwise
`ValueError` is raised. `ecvrf.vrf.new(config)` builds a `Vrf` from it.

`ecvrf.config.Curve` describes a short Weierstrass curve and offers
`is_on_curve`, `add`, `scalar_mult`, `scalar_base_mult`,
`marshal_compressed` and `unmarshal_compressed`. Points are
`ecvrf.config.Point` values; `Point(0, 0)` stands for the point at infinity.

## Errors

`ecvrf.core.VrfError` (also importable from `ecvrf.vrf`) is a subclass of
`ValueError`. It is raised when a proof has the wrong length, holds an invalid
point, or fails verification, and when no curve point can be found for an
input within 256 attempts.

## Lower-level building blocks

`ecvrf.core.Core` wraps a `Config` and exposes the individual steps:

- `q` and `n`
- `marshal`, `unmarshal`, `scalar_mult`, `scalar_base_mult`, `add`, `sub`
- `hash_to_curve_try_and_increment`
- `hash_points`
- `gamma_to_hash`
- `encode_proof` and `decode_proof`
- `rfc6979_nonce`

The helpers `bits2int`, `int2octets` and `bits2octets` follow RFC 6979.

## Limits

The curve arithmetic is plain Python integer arithmetic and is not
constant-time; it is not hardened against timing side channels.

## Running the tests

```
pip install -e ".[test]"
pytest
```