"""
ECIES Error Taxonomy

Every failure of an ECIES operation is reported as a subclass of
`ECIESError`. Each subclass carries an `ErrorReason` so callers can branch
on the category without matching message strings.

All errors abort the operation: no partial envelope and no partial
plaintext is ever returned. `BufferTooSmall` is the only recoverable one.

Author: ECIES Toolkit Project
Date: October 2026
"""

from enum import Enum
from typing import Optional


class ErrorReason(Enum):
    """Failure categories reported by encrypt and decrypt."""

    KEY_GENERATION_FAILED = "key_generation_failed"
    KEY_AGREEMENT_FAILED = "key_agreement_failed"
    MALFORMED_POINT = "malformed_point"
    MALFORMED_ENVELOPE = "malformed_envelope"
    BUFFER_TOO_SMALL = "buffer_too_small"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"
    MAC_VERIFICATION_FAILED = "mac_verification_failed"
    MAC_COMPUTATION_FAILED = "mac_computation_failed"
    ALLOCATION_FAILED = "allocation_failed"


class ECIESError(ValueError):
    """Base class for all ECIES failures."""

    reason: ErrorReason = None
    recoverable: bool = False
    default_message = "ECIES operation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class KeyGenerationFailed(ECIESError):
    reason = ErrorReason.KEY_GENERATION_FAILED
    default_message = "Ephemeral key generation failed"


class KeyAgreementFailed(ECIESError):
    reason = ErrorReason.KEY_AGREEMENT_FAILED
    default_message = "ECDH key agreement failed"


class MalformedPoint(ECIESError):
    reason = ErrorReason.MALFORMED_POINT
    default_message = "Ephemeral public point is missing or malformed"


class MalformedEnvelope(ECIESError):
    reason = ErrorReason.MALFORMED_ENVELOPE
    default_message = "Ciphertext envelope is missing a field or cannot be decoded"


class BufferTooSmall(ECIESError):
    """
    Output buffer cannot hold the decrypted data.

    Recoverable: retry with a buffer of at least `required_length` bytes.
    """

    reason = ErrorReason.BUFFER_TOO_SMALL
    recoverable = True

    def __init__(self, required_length: int, available_length: int = 0):
        self.required_length = required_length
        self.available_length = available_length
        super().__init__(
            f"Output buffer too small: {available_length} bytes given, {required_length} required"
        )


class EncryptionFailed(ECIESError):
    reason = ErrorReason.ENCRYPTION_FAILED
    default_message = "Symmetric encryption failed"


class DecryptionFailed(ECIESError):
    reason = ErrorReason.DECRYPTION_FAILED
    default_message = "Symmetric decryption failed"


class MacVerificationFailed(ECIESError):
    """Tag mismatch. The message never says which check failed."""

    reason = ErrorReason.MAC_VERIFICATION_FAILED
    default_message = "MAC verification failed"


class MacComputationFailed(ECIESError):
    reason = ErrorReason.MAC_COMPUTATION_FAILED
    default_message = "MAC computation failed"


class AllocationFailed(ECIESError):
    reason = ErrorReason.ALLOCATION_FAILED
    default_message = "Could not allocate key material buffer"
