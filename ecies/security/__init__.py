"""
ECIES Security Operations

Encrypt-then-MAC ECIES over the core capabilities:
- ecies_do_encrypt / ecies_do_decrypt: envelope level, caller-owned output buffer
- ecies_encrypt / ecies_decrypt: one-shot DER bytes in, bytes out
"""

from .ecies import (
    ecies_do_encrypt,
    ecies_do_decrypt,
    ecies_decrypt_envelope,
    ecies_encrypt,
    ecies_decrypt,
    generate_recipient_key,
)

__all__ = [
    "ecies_do_encrypt",
    "ecies_do_decrypt",
    "ecies_decrypt_envelope",
    "ecies_encrypt",
    "ecies_decrypt",
    "generate_recipient_key",
]
