"""
msgseal_core.errors
-------------------
Error taxonomy for every public operation. A call either returns a complete
result or raises exactly one of these; library exceptions are chained, never
re-raised raw.

Messages must not carry key material or plaintext.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Type

from cryptography.exceptions import InternalError, UnsupportedAlgorithm


class MsgSealError(Exception):
    pass


class FormatError(MsgSealError):
    """Malformed envelope: bad marker, truncated, misaligned ciphertext."""


class CryptoError(MsgSealError):
    """A primitive rejected its input (OAEP decode, padding, key length)."""


class KeyFormatError(MsgSealError):
    """Unparsable or wrong-type key material."""


class EntropyError(MsgSealError):
    """The OS random source could not supply bytes."""


class AuthenticationError(MsgSealError):
    """Recognition tag mismatch after an otherwise successful decryption."""


class SignatureError(MsgSealError):
    """Verification could not be carried out at all (not a negative match)."""


_LIBRARY_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm, InternalError)


@contextmanager
def translate(kind: Type[MsgSealError], message: str):
    """Re-raise library failures inside the block as `kind`.

    Errors from this module pass through untouched so the first, most
    specific kind wins.
    """
    try:
        yield
    except MsgSealError:
        raise
    except _LIBRARY_ERRORS as e:
        raise kind(message) from e
