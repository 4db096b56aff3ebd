"""
ECIES Core Types and Constants

Defines the algorithm identifiers used to configure an ECIES scheme:
hash functions for the KDF and the MAC, symmetric ciphers, and the named
curves accepted for recipient keys.

Standards Reference:
- SEC 1 v2.0 Section 5.1 (Elliptic Curve Integrated Encryption Scheme)
- ANSI X9.63 (Key Derivation Function)
- ISO/IEC 18033-2 (ECIES-KEM)

Author: ECIES Toolkit Project
Date: October 2026
"""

from enum import Enum

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec


# ============================================================================
# HASH ALGORITHMS (KDF and HMAC)
# ============================================================================


class HashAlgorithm(Enum):
    """
    Hash functions usable inside the X9.63 KDF and the HMAC.

    The digest size is also the MAC key length and the MAC tag length.
    """

    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def digest_size(self) -> int:
        return _HASH_FACTORIES[self]().digest_size

    def new(self) -> hashes.HashAlgorithm:
        """Return a fresh `cryptography` hash instance."""
        return _HASH_FACTORIES[self]()

    @classmethod
    def from_name(cls, name: str) -> "HashAlgorithm":
        normalized = name.lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown hash algorithm: {name}. Known: {[m.value for m in cls]}")


_HASH_FACTORIES = {
    HashAlgorithm.SHA1: hashes.SHA1,
    HashAlgorithm.SHA224: hashes.SHA224,
    HashAlgorithm.SHA256: hashes.SHA256,
    HashAlgorithm.SHA384: hashes.SHA384,
    HashAlgorithm.SHA512: hashes.SHA512,
}


# ============================================================================
# SYMMETRIC CIPHERS
# ============================================================================

AES_BLOCK_SIZE = 16


class SymmetricCipher(Enum):
    """
    Symmetric ciphers for the data encapsulation step.

    Every cipher runs with an all-zero IV: the ephemeral ECDH step makes
    the derived key unique per message. CBC pads with PKCS#7, CTR does not pad.
    """

    AES_128_CBC = "aes128-cbc"
    AES_192_CBC = "aes192-cbc"
    AES_256_CBC = "aes256-cbc"
    AES_128_CTR = "aes128-ctr"
    AES_192_CTR = "aes192-ctr"
    AES_256_CTR = "aes256-ctr"

    @property
    def key_length(self) -> int:
        """Key length in bytes (128/192/256 bits)."""
        return int(self.value[3:6]) // 8

    @property
    def mode(self) -> str:
        return self.value.split("-")[1]

    @property
    def block_size(self) -> int:
        return AES_BLOCK_SIZE

    @property
    def uses_padding(self) -> bool:
        return self.mode == "cbc"

    @classmethod
    def from_name(cls, name: str) -> "SymmetricCipher":
        normalized = name.lower().replace("_", "-")
        for member in cls:
            if member.value == normalized or member.name.lower().replace("_", "-") == normalized:
                return member
        raise ValueError(f"Unknown symmetric cipher: {name}. Known: {[m.value for m in cls]}")


# ============================================================================
# NAMED CURVES
# ============================================================================

# Curve name -> cryptography curve class
SUPPORTED_CURVES = {
    "secp256r1": ec.SECP256R1,
    "secp384r1": ec.SECP384R1,
    "secp521r1": ec.SECP521R1,
    "secp256k1": ec.SECP256K1,
}

CURVE_ALIASES = {
    "p-256": "secp256r1",
    "prime256v1": "secp256r1",
    "p-384": "secp384r1",
    "p-521": "secp521r1",
}


def get_curve(name: str) -> ec.EllipticCurve:
    """
    Resolve a curve name to a `cryptography` curve instance.

    Example:
        >>> get_curve("P-256").name
        'secp256r1'
    """
    key = name.lower()
    key = CURVE_ALIASES.get(key, key)
    curve_class = SUPPORTED_CURVES.get(key)
    if curve_class is None:
        raise ValueError(f"Unsupported curve: {name}. Supported: {list(SUPPORTED_CURVES.keys())}")
    return curve_class()


def is_supported_curve(curve: ec.EllipticCurve) -> bool:
    return curve.name in SUPPORTED_CURVES
