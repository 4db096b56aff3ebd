"""
ECIES Message Types

Data structures shared by the encrypt and decrypt pipelines:
- ECIESParameters: immutable scheme configuration
- CiphertextEnvelope: the wire artifact (ephemeral point, ciphertext, MAC tag)
- DerivedKeyMaterial: per-call KDF output split into encryption and MAC keys

Standards Reference:
- SEC 1 v2.0 Section 5.1.3 / 5.1.4 (ECIES encryption and decryption)

Author: ECIES Toolkit Project
Date: October 2026
"""

from dataclasses import dataclass
from typing import Optional

from ecies.core.crypto import derive_key_x963, wipe
from ecies.core.types import HashAlgorithm, SymmetricCipher


@dataclass(frozen=True)
class ECIESParameters:
    """
    ECIES scheme configuration, shared read-only by many calls.

    Attributes:
        kdf_md: Hash used inside the X9.63 KDF
        mac_md: Hash used for HMAC (its digest size is the MAC key and tag length)
        sym_cipher: Symmetric cipher, or None for XOR keystream mode
        allow_keystream: Must be True to build parameters without a cipher.
            XOR mode derives a one-time pad as long as the plaintext and is
            kept only for interoperability with legacy peers.
    """

    kdf_md: HashAlgorithm = HashAlgorithm.SHA256
    mac_md: HashAlgorithm = HashAlgorithm.SHA256
    sym_cipher: Optional[SymmetricCipher] = SymmetricCipher.AES_128_CBC
    allow_keystream: bool = False

    def __post_init__(self):
        if not isinstance(self.kdf_md, HashAlgorithm):
            raise TypeError(f"kdf_md must be a HashAlgorithm, got {type(self.kdf_md).__name__}")
        if not isinstance(self.mac_md, HashAlgorithm):
            raise TypeError(f"mac_md must be a HashAlgorithm, got {type(self.mac_md).__name__}")
        if self.sym_cipher is None:
            if not self.allow_keystream:
                raise ValueError(
                    "XOR keystream mode (sym_cipher=None) requires allow_keystream=True"
                )
        elif not isinstance(self.sym_cipher, SymmetricCipher):
            raise TypeError(
                f"sym_cipher must be a SymmetricCipher or None, got {type(self.sym_cipher).__name__}"
            )

    @property
    def is_keystream_mode(self) -> bool:
        return self.sym_cipher is None

    @property
    def mac_key_length(self) -> int:
        return self.mac_md.digest_size

    @property
    def mac_tag_length(self) -> int:
        return self.mac_md.digest_size

    def enc_key_length(self, data_length: int) -> int:
        """
        Encryption key length for a message of `data_length` bytes.

        The cipher key length, or the data length itself in keystream mode
        (one key byte per plaintext byte).
        """
        if self.sym_cipher is None:
            return data_length
        return self.sym_cipher.key_length

    def describe(self) -> str:
        cipher = self.sym_cipher.value if self.sym_cipher else "xor"
        return f"x963-{self.kdf_md.value}/{cipher}/hmac-{self.mac_md.value}"


@dataclass(frozen=True)
class CiphertextEnvelope:
    """
    ECIES ciphertext value.

    Fields are Optional so an incomplete envelope can be represented and
    rejected by decrypt instead of failing at construction.

    Attributes:
        ephem_point: Sender's one-time public key, X9.62 compressed
        ciphertext: Cipher or keystream output
        mactag: HMAC over `ciphertext`, MAC digest size bytes
    """

    ephem_point: Optional[bytes]
    ciphertext: Optional[bytes]
    mactag: Optional[bytes]

    def __repr__(self):
        def _len(value):
            return None if value is None else len(value)

        return (
            f"CiphertextEnvelope(ephem_point={_len(self.ephem_point)}B, "
            f"ciphertext={_len(self.ciphertext)}B, mactag={_len(self.mactag)}B)"
        )


@dataclass
class DerivedKeyMaterial:
    """
    KDF output for one call, split positionally into two views.

    First `enc_key_length` bytes are the encryption key, the remaining
    `mac_key_length` bytes are the MAC key. Use as a context manager: the
    buffer is zeroed on exit, whether the block succeeds or raises.
    """

    buffer: bytearray
    enc_key_length: int
    mac_key_length: int

    def __post_init__(self):
        if len(self.buffer) != self.enc_key_length + self.mac_key_length:
            length = len(self.buffer)
            wipe(self.buffer)
            raise ValueError(
                f"Key material length {length} does not match "
                f"{self.enc_key_length} + {self.mac_key_length}"
            )

    @classmethod
    def from_shared_secret(
        cls,
        shared_secret: bytearray,
        enc_key_length: int,
        mac_key_length: int,
        kdf_md: HashAlgorithm,
    ) -> "DerivedKeyMaterial":
        """Run the X9.63 KDF for `enc_key_length + mac_key_length` bytes."""
        buffer = derive_key_x963(shared_secret, enc_key_length + mac_key_length, kdf_md)
        return cls(buffer, enc_key_length, mac_key_length)

    @property
    def enc_key(self) -> memoryview:
        return memoryview(self.buffer)[:self.enc_key_length]

    @property
    def mac_key(self) -> memoryview:
        return memoryview(self.buffer)[self.enc_key_length:]

    def wipe(self) -> None:
        wipe(self.buffer)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.wipe()
        return False

    def __repr__(self):
        return f"DerivedKeyMaterial(enc_key_length={self.enc_key_length}, mac_key_length={self.mac_key_length})"
