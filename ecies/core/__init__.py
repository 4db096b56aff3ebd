"""
ECIES Core Types and Utilities

Leaf capabilities the ECIES pipeline is built from.

Submodules:
- types: Hash, cipher and curve identifiers
- primitives: Ephemeral keys and X9.62 point encoding/decoding
- crypto: ECDH, X9.63 KDF, HMAC, symmetric transform, buffer wiping
"""

from .types import (
    AES_BLOCK_SIZE,
    SUPPORTED_CURVES,
    HashAlgorithm,
    SymmetricCipher,
    get_curve,
    is_supported_curve,
)

from .primitives import (
    generate_ephemeral_key,
    encode_public_key_compressed,
    decode_public_key_compressed,
    public_key_fingerprint,
)

from .crypto import (
    compute_ecdh_shared_secret,
    derive_key_x963,
    compute_hmac,
    verify_hmac,
    symmetric_encrypt,
    symmetric_decrypt,
    xor_keystream,
    wipe,
)

__all__ = [
    # Types
    "AES_BLOCK_SIZE",
    "SUPPORTED_CURVES",
    "HashAlgorithm",
    "SymmetricCipher",
    "get_curve",
    "is_supported_curve",

    # EC provider
    "generate_ephemeral_key",
    "encode_public_key_compressed",
    "decode_public_key_compressed",
    "public_key_fingerprint",

    # Crypto
    "compute_ecdh_shared_secret",
    "derive_key_x963",
    "compute_hmac",
    "verify_hmac",
    "symmetric_encrypt",
    "symmetric_decrypt",
    "xor_keystream",
    "wipe",
]
