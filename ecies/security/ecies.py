"""
ECIES (Elliptic Curve Integrated Encryption Scheme) Implementation.

Implements ECIES encryption/decryption according to:
- SEC 1 v2.0 Section 5.1 (Elliptic Curve Integrated Encryption Scheme)
- ANSI X9.63 (KDF)

Construction:
    1. Fresh ephemeral key pair on the recipient's curve
    2. ECDH between the ephemeral private key and the recipient public key
    3. X9.63 KDF -> enc_key || mac_key
    4. Encrypt (AES with zero IV, or XOR keystream)
    5. HMAC over the ciphertext (encrypt-then-MAC)

On decryption the MAC is verified before any byte of ciphertext is
decrypted. Derived key material and the shared secret are zeroed on
every exit path.

Zero IV:
    The IV is all-zero for every message. This is only safe because the
    ephemeral key is generated inside ecies_do_encrypt for every call, so
    the derived encryption key is never reused. No function here accepts a
    caller-supplied ephemeral key.

Output Format (ecies_encrypt):
    DER ECIESCiphertextValue ::= SEQUENCE { ephemPoint, ciphertext, mactag }
"""

from typing import Optional, Union

from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
)

from ecies.config import ECIES_CONSTANTS, get_default_parameters
from ecies.core.crypto import (
    compute_ecdh_shared_secret,
    compute_hmac,
    symmetric_decrypt,
    symmetric_encrypt,
    verify_hmac,
    wipe,
    xor_keystream,
)
from ecies.core.primitives import (
    decode_public_key_compressed,
    encode_public_key_compressed,
    generate_ephemeral_key,
    public_key_fingerprint,
)
from ecies.core.types import get_curve
from ecies.errors import BufferTooSmall, ECIESError, MalformedEnvelope
from ecies.messages.encoder import decode_envelope, encode_envelope
from ecies.messages.types import CiphertextEnvelope, DerivedKeyMaterial, ECIESParameters
from ecies.utils.logger import ECIESLogger

logger = ECIESLogger.get_logger(
    ECIES_CONSTANTS.LOGGER_NAME,
    level=ECIES_CONSTANTS.LOG_LEVEL,
    log_dir=ECIES_CONSTANTS.LOG_DIR,
)

WritableBuffer = Union[bytearray, memoryview]


def _writable_byte_view(out: WritableBuffer) -> memoryview:
    """
    Flat unsigned-byte view over a caller buffer.

    Any writable, C-contiguous buffer is accepted (bytearray, array.array,
    memoryviews of any item format); sizes are then compared in bytes.

    Raises:
        TypeError: If the buffer is immutable, read-only or not contiguous
    """
    if isinstance(out, bytes):
        raise TypeError("Output buffer must be writable (bytearray or writable memoryview)")
    view = memoryview(out)
    if view.readonly or not view.c_contiguous:
        view.release()
        raise TypeError("Output buffer must be writable and contiguous")
    byte_view = view.cast("B")
    view.release()
    return byte_view


def ecies_do_encrypt(
    params: ECIESParameters,
    plaintext: bytes,
    recipient_public_key: EllipticCurvePublicKey,
) -> CiphertextEnvelope:
    """
    Encrypt `plaintext` for `recipient_public_key`.

    Args:
        params: Scheme parameters (KDF hash, MAC hash, cipher or keystream)
        plaintext: Data to encrypt, any length (including empty)
        recipient_public_key: Recipient's static public key

    Returns:
        CiphertextEnvelope: ephemeral point, ciphertext and MAC tag

    Raises:
        KeyGenerationFailed, KeyAgreementFailed, EncryptionFailed,
        MacComputationFailed, AllocationFailed: nothing is returned on failure
        TypeError: If `plaintext` is not bytes-like

    Example:
        >>> from cryptography.hazmat.primitives.asymmetric import ec
        >>> key = ec.generate_private_key(ec.SECP256R1())
        >>> env = ecies_do_encrypt(ECIESParameters(), b"secret", key.public_key())
        >>> len(env.ephem_point), len(env.mactag)
        (33, 32)
    """
    if not isinstance(plaintext, (bytes, bytearray, memoryview)):
        raise TypeError(f"plaintext must be bytes-like, got {type(plaintext).__name__}")
    plaintext = bytes(plaintext)
    shared_secret = None
    try:
        # 1. Ephemeral key pair, compressed point
        ephemeral_key = generate_ephemeral_key(recipient_public_key.curve)
        ephem_point = encode_public_key_compressed(ephemeral_key.public_key())

        # 2. Key lengths
        enc_key_length = params.enc_key_length(len(plaintext))
        mac_key_length = params.mac_key_length

        # 3-4. ECDH + KDF
        shared_secret = compute_ecdh_shared_secret(ephemeral_key, recipient_public_key)
        with DerivedKeyMaterial.from_shared_secret(
            shared_secret, enc_key_length, mac_key_length, params.kdf_md
        ) as key_material:
            wipe(shared_secret)

            # 5. Encrypt
            if params.is_keystream_mode:
                ciphertext = xor_keystream(key_material.enc_key, plaintext)
            else:
                ciphertext = symmetric_encrypt(params.sym_cipher, key_material.enc_key, plaintext)

            # 6. MAC over ciphertext
            mactag = compute_hmac(key_material.mac_key, ciphertext, params.mac_md)

        logger.debug(
            f"Encrypted {len(plaintext)} bytes -> {len(ciphertext)} bytes "
            f"[{params.describe()}, curve={recipient_public_key.curve.name}, "
            f"ephemeral={public_key_fingerprint(ephemeral_key.public_key())}]"
        )
        return CiphertextEnvelope(ephem_point=ephem_point, ciphertext=ciphertext, mactag=mactag)

    except ECIESError as e:
        logger.info(f"ECIES encryption failed ({e.reason.value}): {e}")
        raise
    finally:
        wipe(shared_secret)


def ecies_do_decrypt(
    envelope: CiphertextEnvelope,
    params: ECIESParameters,
    recipient_private_key: EllipticCurvePrivateKey,
    out: Optional[WritableBuffer] = None,
) -> int:
    """
    Decrypt an envelope into a caller-owned buffer.

    Two-phase buffer protocol:
    - `out=None`: returns `len(envelope.ciphertext)`, an upper bound on the
      plaintext length, without doing any cryptography
    - `out` shorter than the ciphertext: raises BufferTooSmall carrying the
      required length, `out` is left untouched
    - otherwise: writes the plaintext to `out[:n]` and returns `n`

    Args:
        envelope: Envelope produced by ecies_do_encrypt
        params: Same parameters used to encrypt
        recipient_private_key: Recipient's static private key
        out: Writable contiguous buffer (bytearray, array, writable memoryview),
            or None to probe. Capacity is counted in bytes.

    Returns:
        int: required length (probe) or exact plaintext length written

    Raises:
        BufferTooSmall: recoverable, retry with `required_length` bytes
        MalformedEnvelope, MalformedPoint, KeyAgreementFailed,
        MacComputationFailed, MacVerificationFailed, DecryptionFailed,
        AllocationFailed: terminal, no plaintext is written
    """
    if envelope.ciphertext is None:
        raise MalformedEnvelope("Envelope has no ciphertext")
    ciphertext = bytes(envelope.ciphertext)

    # Buffer size negotiation, in bytes whatever the buffer's item format
    if out is None:
        return len(ciphertext)
    out_view = _writable_byte_view(out)
    if out_view.nbytes < len(ciphertext):
        available = out_view.nbytes
        out_view.release()
        logger.debug(f"Output buffer too small: {available} < {len(ciphertext)}")
        raise BufferTooSmall(required_length=len(ciphertext), available_length=available)

    shared_secret = None
    try:
        # 1. Ephemeral point
        if not envelope.ephem_point:
            raise MalformedEnvelope("Envelope has no ephemeral point")
        ephemeral_public_key = decode_public_key_compressed(
            envelope.ephem_point, recipient_private_key.curve
        )

        # 2. Key lengths (ciphertext length sizes the keystream)
        enc_key_length = params.enc_key_length(len(ciphertext))
        mac_key_length = params.mac_key_length

        # 3-4. ECDH + KDF
        shared_secret = compute_ecdh_shared_secret(recipient_private_key, ephemeral_public_key)
        with DerivedKeyMaterial.from_shared_secret(
            shared_secret, enc_key_length, mac_key_length, params.kdf_md
        ) as key_material:
            wipe(shared_secret)

            # 5. Verify MAC over ciphertext before touching it
            if not envelope.mactag:
                raise MalformedEnvelope("Envelope has no MAC tag")
            expected_tag = compute_hmac(key_material.mac_key, ciphertext, params.mac_md)
            verify_hmac(expected_tag, envelope.mactag)

            # 6. Decrypt
            if params.is_keystream_mode:
                plaintext = xor_keystream(key_material.enc_key, ciphertext)
            else:
                plaintext = symmetric_decrypt(params.sym_cipher, key_material.enc_key, ciphertext)

        out_view[:len(plaintext)] = plaintext
        logger.debug(
            f"Decrypted {len(ciphertext)} bytes -> {len(plaintext)} bytes "
            f"[{params.describe()}, curve={recipient_private_key.curve.name}]"
        )
        return len(plaintext)

    except ECIESError as e:
        logger.info(f"ECIES decryption failed ({e.reason.value}): {e}")
        raise
    finally:
        wipe(shared_secret)
        out_view.release()


def ecies_decrypt_envelope(
    envelope: CiphertextEnvelope,
    params: ECIESParameters,
    recipient_private_key: EllipticCurvePrivateKey,
) -> bytes:
    """Probe, allocate and fill in one call. Returns the plaintext."""
    required = ecies_do_decrypt(envelope, params, recipient_private_key)
    buffer = bytearray(required)
    try:
        length = ecies_do_decrypt(envelope, params, recipient_private_key, out=buffer)
        return bytes(buffer[:length])
    finally:
        wipe(buffer)


def ecies_encrypt(
    plaintext: bytes,
    recipient_public_key: EllipticCurvePublicKey,
    params: Optional[ECIESParameters] = None,
) -> bytes:
    """
    Encrypt and serialize to DER.

    Args:
        plaintext: Data to encrypt
        recipient_public_key: Recipient's public key
        params: Scheme parameters (default: configured default scheme)

    Returns:
        bytes: DER-encoded ECIESCiphertextValue

    Example:
        >>> from cryptography.hazmat.primitives.asymmetric import ec
        >>> key = ec.generate_private_key(ec.SECP256R1())
        >>> ecies_decrypt(ecies_encrypt(b"secret", key.public_key()), key)
        b'secret'
    """
    if params is None:
        params = get_default_parameters()
    return encode_envelope(ecies_do_encrypt(params, plaintext, recipient_public_key))


def ecies_decrypt(
    encrypted_data: bytes,
    recipient_private_key: EllipticCurvePrivateKey,
    params: Optional[ECIESParameters] = None,
) -> bytes:
    """
    Decode DER and decrypt.

    Raises:
        MalformedEnvelope: If `encrypted_data` is not a valid envelope
        ECIESError: Any decryption failure (see ecies_do_decrypt)
    """
    if params is None:
        params = get_default_parameters()
    envelope = decode_envelope(encrypted_data)
    return ecies_decrypt_envelope(envelope, params, recipient_private_key)


def generate_recipient_key(curve_name: Optional[str] = None) -> EllipticCurvePrivateKey:
    """
    Generate a static recipient key pair (default curve from configuration).

    Raises:
        ValueError: If the curve is not supported
        KeyGenerationFailed: If key generation fails
    """
    curve = get_curve(curve_name or ECIES_CONSTANTS.DEFAULT_CURVE)
    return generate_ephemeral_key(curve)
