"""
ECIES Core Primitives - EC key agreement provider

Ephemeral key generation and public point encoding/decoding on top of
`cryptography`. The curve arithmetic itself stays inside the library.

Standards Reference:
- SEC 1 v2.0 Section 2.3.3 / 2.3.4 (Elliptic-Curve-Point conversions)
- ANSI X9.62 (compressed and uncompressed point formats)

Author: ECIES Toolkit Project
Date: October 2026
"""

import hashlib

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
)

from ecies.core.types import is_supported_curve
from ecies.errors import KeyGenerationFailed, MalformedPoint


def generate_ephemeral_key(curve: ec.EllipticCurve) -> EllipticCurvePrivateKey:
    """
    Generate a one-time key pair on the given curve.

    Args:
        curve: Curve of the recipient key (e.g. `recipient_public_key.curve`)

    Returns:
        EllipticCurvePrivateKey: fresh ephemeral private key

    Raises:
        KeyGenerationFailed: If the curve is not supported or generation fails
    """
    if not is_supported_curve(curve):
        raise KeyGenerationFailed(f"Unsupported curve for ephemeral key: {curve.name}")
    try:
        return ec.generate_private_key(curve)
    except Exception as e:
        raise KeyGenerationFailed(f"Ephemeral key generation failed: {e}") from e


def encode_public_key_compressed(public_key: EllipticCurvePublicKey) -> bytes:
    """
    Encode a public key to X9.62 compressed point format.

    Compressed format: 1 byte prefix (0x02 y even, 0x03 y odd) + x-coordinate.
    33 bytes on P-256 and secp256k1, 49 on P-384, 67 on P-521.

    Example:
        >>> key = ec.generate_private_key(ec.SECP256R1()).public_key()
        >>> len(encode_public_key_compressed(key))
        33
    """
    return public_key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.CompressedPoint,
    )


def decode_public_key_compressed(
    encoded_point: bytes, curve: ec.EllipticCurve
) -> EllipticCurvePublicKey:
    """
    Decode an X9.62 point (compressed or uncompressed) on `curve`.

    Args:
        encoded_point: Encoded point bytes (0x02/0x03 || x or 0x04 || x || y)
        curve: Curve the point must lie on (the recipient private key curve)

    Returns:
        EllipticCurvePublicKey: Decoded public key

    Raises:
        MalformedPoint: If the data is empty, truncated, or not on the curve
    """
    if not encoded_point:
        raise MalformedPoint("Ephemeral point is empty")

    coordinate_size = (curve.key_size + 7) // 8
    prefix = encoded_point[0]
    if prefix in (0x02, 0x03):
        expected = 1 + coordinate_size
    elif prefix == 0x04:
        expected = 1 + 2 * coordinate_size
    else:
        raise MalformedPoint(f"Invalid point prefix: 0x{prefix:02x}")

    if len(encoded_point) != expected:
        raise MalformedPoint(
            f"Invalid point length: {len(encoded_point)} bytes (expected {expected} on {curve.name})"
        )

    try:
        return EllipticCurvePublicKey.from_encoded_point(curve, bytes(encoded_point))
    except ValueError as e:
        raise MalformedPoint(f"Point is not on curve {curve.name}: {e}") from e


def public_key_fingerprint(public_key: EllipticCurvePublicKey) -> str:
    """
    Short SHA-256 fingerprint of a public key, for logs only.

    Returns:
        str: first 16 hex characters of SHA-256(compressed point)
    """
    return hashlib.sha256(encode_public_key_compressed(public_key)).hexdigest()[:16]
