"""
ECIES Envelope Encoder/Decoder - ASN.1 DER Implementation.

Serializes a CiphertextEnvelope to the ECIESCiphertextValue SEQUENCE and
back. DER is canonical, so decoding re-encodes the result and rejects any
input that does not round-trip byte for byte (trailing data, long-form
lengths, and so on).

Standards: SEC 1 v2.0 Section 5.1, ITU-T X.690 (DER)

Author: ECIES Toolkit Project
Date: October 2026
"""

from pathlib import Path

import asn1tools

from ecies.errors import MalformedEnvelope
from ecies.messages.types import CiphertextEnvelope

# ASN.1 schema compilation
MESSAGES_DIR = Path(__file__).parent
ECIES_SCHEMA = MESSAGES_DIR / "ecies.asn"
ENVELOPE_TYPE = "ECIESCiphertextValue"

asn1_compiler = asn1tools.compile_files([str(ECIES_SCHEMA)], codec="der")


def envelope_to_asn1(envelope: CiphertextEnvelope) -> dict:
    """Convert a CiphertextEnvelope to the ASN.1 dict expected by the compiler."""
    for name in ("ephem_point", "ciphertext", "mactag"):
        if getattr(envelope, name) is None:
            raise MalformedEnvelope(f"Cannot encode envelope: missing field '{name}'")
    return {
        "ephemPoint": bytes(envelope.ephem_point),
        "ciphertext": bytes(envelope.ciphertext),
        "mactag": bytes(envelope.mactag),
    }


def asn1_to_envelope(asn1_dict: dict) -> CiphertextEnvelope:
    return CiphertextEnvelope(
        ephem_point=asn1_dict["ephemPoint"],
        ciphertext=asn1_dict["ciphertext"],
        mactag=asn1_dict["mactag"],
    )


def encode_envelope(envelope: CiphertextEnvelope) -> bytes:
    """
    Encode an envelope as DER.

    Raises:
        MalformedEnvelope: If a field is missing or encoding fails
    """
    asn1_dict = envelope_to_asn1(envelope)
    try:
        return bytes(asn1_compiler.encode(ENVELOPE_TYPE, asn1_dict))
    except Exception as e:
        raise MalformedEnvelope(f"Failed to encode ECIES envelope: {e}") from e


def decode_envelope(data: bytes) -> CiphertextEnvelope:
    """
    Decode a DER ECIESCiphertextValue.

    Raises:
        MalformedEnvelope: If the data is empty, not valid DER, or not canonical
    """
    if not data:
        raise MalformedEnvelope("Encoded envelope is empty")

    data = bytes(data)
    try:
        asn1_dict = asn1_compiler.decode(ENVELOPE_TYPE, data)
        canonical = bytes(asn1_compiler.encode(ENVELOPE_TYPE, asn1_dict))
    except Exception as e:
        raise MalformedEnvelope(f"Failed to decode ECIES envelope: {e}") from e

    if canonical != data:
        raise MalformedEnvelope("ECIES envelope is not canonical DER or has trailing data")

    return asn1_to_envelope(asn1_dict)
