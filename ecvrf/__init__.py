"""Elliptic Curve Verifiable Random Function (ECVRF) with secp256k1 and P-256 suites."""

__version__ = "0.1.0"
__all__ = ["config", "core", "vrf"]