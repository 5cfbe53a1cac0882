"""
msgseal_core.envelope
---------------------
Defines the Envelope class: the binary container produced by
encrypt_message() and consumed by decrypt_message().

Wire layout (byte-exact):

    "MESSAGE:" (8) || wrapped_key (RSA modulus bytes) || iv (16) || ciphertext (n * 16)

Parsing only checks framing. Nothing here touches a key or a cipher, so a
buffer can be rejected before any cryptographic work happens.
"""

from __future__ import annotations
from dataclasses import dataclass

from .constants import AES_BLOCK_SIZE, AES_IV_SIZE, ENCR_MARKER, ENCR_MARKER_SIZE
from .errors import FormatError
from .utils import BytesLike, b64d, b64e, bin2hex, hex2bin


def is_envelope(data) -> bool:
    """True if data looks like a candidate envelope (starts with the marker)."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        return False
    return bytes(data[:ENCR_MARKER_SIZE]) == ENCR_MARKER


def check_marker(data: bytes) -> None:
    if len(data) < ENCR_MARKER_SIZE or data[:ENCR_MARKER_SIZE] != ENCR_MARKER:
        raise FormatError("missing envelope marker")


@dataclass(frozen=True)
class Envelope:
    wrapped_key: bytes
    iv: bytes
    ciphertext: bytes

    def __len__(self) -> int:
        return ENCR_MARKER_SIZE + len(self.wrapped_key) + len(self.iv) + len(self.ciphertext)

    def to_bytes(self) -> bytes:
        return ENCR_MARKER + self.wrapped_key + self.iv + self.ciphertext

    def to_hex(self) -> str:
        return bin2hex(self.to_bytes())

    @classmethod
    def from_bytes(cls, data: BytesLike, modulus_bytes: int) -> "Envelope":
        """Split an envelope for a recipient whose modulus is modulus_bytes long.

        Raises FormatError on a bad marker, truncation, or a ciphertext that is
        empty or not block aligned.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise FormatError("envelope must be bytes")
        data = bytes(data)
        check_marker(data)

        offset = ENCR_MARKER_SIZE
        if len(data) - offset < modulus_bytes:
            raise FormatError("envelope truncated in wrapped key")
        wrapped_key = data[offset:offset + modulus_bytes]
        offset += modulus_bytes

        if len(data) - offset < AES_IV_SIZE:
            raise FormatError("envelope truncated in iv")
        iv = data[offset:offset + AES_IV_SIZE]
        offset += AES_IV_SIZE

        ciphertext = data[offset:]
        if not ciphertext or len(ciphertext) % AES_BLOCK_SIZE:
            raise FormatError("ciphertext length is not a positive multiple of the block size")

        return cls(wrapped_key=wrapped_key, iv=iv, ciphertext=ciphertext)

    @classmethod
    def from_hex(cls, s: BytesLike, modulus_bytes: int) -> "Envelope":
        return cls.from_bytes(hex2bin(s), modulus_bytes)

    def to_b64(self) -> str:
        return b64e(self.to_bytes())

    @classmethod
    def from_b64(cls, s: BytesLike, modulus_bytes: int) -> "Envelope":
        return cls.from_bytes(b64d(s), modulus_bytes)
