"""
msgseal_core.utils
------------------
Byte/text helpers shared by the crypto modules and by callers that embed
envelopes into text payloads (hex or base64).
"""

from __future__ import annotations
import base64, hashlib, os
from typing import Union

from .errors import EntropyError, FormatError

BytesLike = Union[bytes, bytearray, memoryview, str]


def to_bytes(data: BytesLike) -> bytes:
    # str input is taken as UTF-8 text
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes-like or str, got {type(data).__name__}")

def random_bytes(n: int) -> bytes:
    # os.urandom is the CSPRNG; it raises rather than return weak bytes
    try:
        return os.urandom(n)
    except (NotImplementedError, OSError) as e:
        raise EntropyError("secure random source unavailable") from e

def _text(s: BytesLike) -> str:
    return to_bytes(s).decode("ascii")

def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: BytesLike) -> bytes:
    try:
        return base64.b64decode(_text(s), validate=True)
    except (TypeError, ValueError) as e:
        # binascii.Error and UnicodeDecodeError are ValueErrors
        raise FormatError("invalid base64 string") from e

def bin2hex(b: bytes) -> str:
    return bytes(b).hex()

def hex2bin(s: BytesLike) -> bytes:
    try:
        return bytes.fromhex(_text(s).strip())
    except (TypeError, ValueError) as e:
        raise FormatError("invalid hex string") from e

def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
