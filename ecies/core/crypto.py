"""
ECIES Cryptographic Operations

Leaf capabilities consumed by the ECIES encrypt/decrypt pipeline:
- ECDH shared secret computation
- ANSI X9.63 key derivation
- HMAC computation and verification
- Symmetric transform (AES-CBC/CTR with zero IV, or XOR keystream)
- In-place wiping of secret buffers

Standards Reference:
- NIST SP 800-56A Rev. 3 - ECDH
- ANSI X9.63 / SEC 1 v2.0 Section 3.6.1 - KDF
- RFC 2104 - HMAC

Author: ECIES Toolkit Project
Date: October 2026
"""

from typing import Union

from cryptography.hazmat.primitives import constant_time, hmac, padding
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
)
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.x963kdf import X963KDF

from ecies.core.types import HashAlgorithm, SymmetricCipher
from ecies.errors import (
    AllocationFailed,
    DecryptionFailed,
    EncryptionFailed,
    KeyAgreementFailed,
    MacComputationFailed,
    MacVerificationFailed,
)

BytesLike = Union[bytes, bytearray, memoryview]


# ============================================================================
# SECRET BUFFER HANDLING
# ============================================================================


def wipe(buffer: Union[bytearray, memoryview]) -> None:
    """Overwrite a mutable buffer with zeros in place."""
    if buffer is None:
        return
    buffer[:] = bytes(len(buffer))


# ============================================================================
# ECDH OPERATIONS (NIST SP 800-56A)
# ============================================================================


def compute_ecdh_shared_secret(
    private_key: EllipticCurvePrivateKey,
    public_key: EllipticCurvePublicKey
) -> bytearray:
    """
    Compute the raw ECDH shared secret (x-coordinate of d*Q).

    Args:
        private_key: Local private key (ephemeral on encrypt, static on decrypt)
        public_key: Peer public key on the same curve

    Returns:
        bytearray: Shared secret, mutable so the caller can wipe it

    Raises:
        KeyAgreementFailed: On curve mismatch or library failure
    """
    if private_key.curve.name != public_key.curve.name:
        raise KeyAgreementFailed(
            f"Curve mismatch: private key on {private_key.curve.name}, "
            f"public key on {public_key.curve.name}"
        )
    try:
        return bytearray(private_key.exchange(ec.ECDH(), public_key))
    except Exception as e:
        raise KeyAgreementFailed(f"Failed to compute ECDH shared secret: {e}") from e


# ============================================================================
# X9.63 KEY DERIVATION
# ============================================================================


def derive_key_x963(
    shared_secret: BytesLike,
    length: int,
    hash_algorithm: HashAlgorithm,
) -> bytearray:
    """
    Stretch a shared secret to `length` bytes with the ANSI X9.63 KDF.

    No SharedInfo is used, matching the classic SEC 1 ECIES profile.

    Raises:
        KeyAgreementFailed: If derivation fails or the length is invalid
        AllocationFailed: If the output buffer cannot be allocated
    """
    if length < 1:
        raise KeyAgreementFailed(f"Invalid derived key length: {length}")
    try:
        kdf = X963KDF(algorithm=hash_algorithm.new(), length=length, sharedinfo=None)
        return bytearray(kdf.derive(shared_secret))
    except MemoryError as e:
        raise AllocationFailed(f"Could not allocate {length} bytes of key material") from e
    except Exception as e:
        raise KeyAgreementFailed(f"Failed to derive key material: {e}") from e


# ============================================================================
# HMAC (RFC 2104)
# ============================================================================


def compute_hmac(key: BytesLike, message: BytesLike, hash_algorithm: HashAlgorithm) -> bytes:
    """
    Compute HMAC over `message`.

    Returns:
        bytes: tag of `hash_algorithm.digest_size` bytes

    Raises:
        MacComputationFailed: If the MAC cannot be computed
    """
    try:
        mac = hmac.HMAC(key, hash_algorithm.new())
        mac.update(message)
        return mac.finalize()
    except Exception as e:
        raise MacComputationFailed(f"Failed to compute HMAC: {e}") from e


def verify_hmac(expected_tag: bytes, received_tag: bytes) -> None:
    """
    Compare a recomputed tag with the received one.

    Length first, then constant-time content comparison. Both failures raise
    the same `MacVerificationFailed` with the same message.
    """
    if len(expected_tag) != len(received_tag):
        raise MacVerificationFailed()
    if not constant_time.bytes_eq(bytes(expected_tag), bytes(received_tag)):
        raise MacVerificationFailed()


# ============================================================================
# SYMMETRIC TRANSFORM
# ============================================================================


def _build_cipher(cipher: SymmetricCipher, key: BytesLike) -> Cipher:
    if len(key) != cipher.key_length:
        raise ValueError(f"Invalid key length for {cipher.value}: {len(key)} (expected {cipher.key_length})")
    iv = bytes(cipher.block_size)
    if cipher.mode == "cbc":
        mode = modes.CBC(iv)
    else:
        mode = modes.CTR(iv)
    return Cipher(algorithms.AES(key), mode)


def symmetric_encrypt(cipher: SymmetricCipher, key: BytesLike, plaintext: BytesLike) -> bytes:
    """
    Encrypt with a zero IV. CBC output is PKCS#7 padded.

    Raises:
        EncryptionFailed: If cipher setup, update or finalization fails
    """
    try:
        data = bytes(plaintext)
        if cipher.uses_padding:
            padder = padding.PKCS7(cipher.block_size * 8).padder()
            data = padder.update(data) + padder.finalize()
        encryptor = _build_cipher(cipher, key).encryptor()
        return encryptor.update(data) + encryptor.finalize()
    except Exception as e:
        raise EncryptionFailed(f"{cipher.value} encryption failed: {e}") from e


def symmetric_decrypt(cipher: SymmetricCipher, key: BytesLike, ciphertext: BytesLike) -> bytes:
    """
    Decrypt with a zero IV. CBC padding is removed and checked.

    Raises:
        DecryptionFailed: On bad key, bad block alignment or bad padding
    """
    try:
        decryptor = _build_cipher(cipher, key).decryptor()
        data = decryptor.update(bytes(ciphertext)) + decryptor.finalize()
        if cipher.uses_padding:
            unpadder = padding.PKCS7(cipher.block_size * 8).unpadder()
            data = unpadder.update(data) + unpadder.finalize()
        return data
    except Exception as e:
        raise DecryptionFailed(f"{cipher.value} decryption failed: {e}") from e


def xor_keystream(key: BytesLike, data: BytesLike) -> bytes:
    """
    XOR each data byte with the matching key byte.

    The key must be exactly as long as the data (one-time keystream).
    """
    if len(key) != len(data):
        raise ValueError(f"Keystream length {len(key)} does not match data length {len(data)}")
    return bytes(k ^ d for k, d in zip(key, data))
