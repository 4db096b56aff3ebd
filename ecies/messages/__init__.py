"""
ECIES Messages

Data model and the ASN.1 DER wire codec for the ciphertext envelope.
"""

from .types import CiphertextEnvelope, DerivedKeyMaterial, ECIESParameters
from .encoder import decode_envelope, encode_envelope

__all__ = [
    "CiphertextEnvelope",
    "DerivedKeyMaterial",
    "ECIESParameters",
    "encode_envelope",
    "decode_envelope",
]
