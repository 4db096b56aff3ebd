"""
ECIES - Elliptic Curve Integrated Encryption Scheme

Hybrid public-key encryption: ephemeral ECDH, X9.63 KDF, AES (or XOR
keystream) and HMAC over the ciphertext.

Usage:
    from ecies import ecies_encrypt, ecies_decrypt, generate_recipient_key

    key = generate_recipient_key()
    data = ecies_encrypt(b"secret", key.public_key())
    assert ecies_decrypt(data, key) == b"secret"
"""

from ecies.core.types import HashAlgorithm, SymmetricCipher
from ecies.errors import (
    AllocationFailed,
    BufferTooSmall,
    DecryptionFailed,
    ECIESError,
    EncryptionFailed,
    ErrorReason,
    KeyAgreementFailed,
    KeyGenerationFailed,
    MacComputationFailed,
    MacVerificationFailed,
    MalformedEnvelope,
    MalformedPoint,
)
from ecies.messages.types import CiphertextEnvelope, ECIESParameters
from ecies.messages.encoder import decode_envelope, encode_envelope
from ecies.config import (
    configure_logging,
    get_default_parameters,
    get_scheme_parameters,
    set_log_level,
)
from ecies.security.ecies import (
    ecies_decrypt,
    ecies_decrypt_envelope,
    ecies_do_decrypt,
    ecies_do_encrypt,
    ecies_encrypt,
    generate_recipient_key,
)

__version__ = "1.0.0"
__all__ = [
    # Parameters and envelope
    "HashAlgorithm",
    "SymmetricCipher",
    "ECIESParameters",
    "CiphertextEnvelope",
    "get_default_parameters",
    "get_scheme_parameters",
    # Logging
    "configure_logging",
    "set_log_level",
    # Operations
    "ecies_do_encrypt",
    "ecies_do_decrypt",
    "ecies_decrypt_envelope",
    "ecies_encrypt",
    "ecies_decrypt",
    "encode_envelope",
    "decode_envelope",
    "generate_recipient_key",
    # Errors
    "ErrorReason",
    "ECIESError",
    "KeyGenerationFailed",
    "KeyAgreementFailed",
    "MalformedPoint",
    "MalformedEnvelope",
    "BufferTooSmall",
    "EncryptionFailed",
    "DecryptionFailed",
    "MacVerificationFailed",
    "MacComputationFailed",
    "AllocationFailed",
]
