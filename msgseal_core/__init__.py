"""
msgseal core package
====================
Message protection primitives for ledger payloads.

Provides:
- RSA keypair generation and key matching (PEM in, PEM out)
- Single-recipient envelope encryption (RSA-OAEP wrapped AES-256-CBC)
- Detached RSA/SHA-256 signatures
- A typed error taxonomy; no library exception escapes a public call
"""

from .crypto import decrypt_message, encrypt_message, sign_message, verify_signature
from .envelope import Envelope, is_envelope
from .errors import (
    AuthenticationError, CryptoError, EntropyError, FormatError,
    KeyFormatError, MsgSealError, SignatureError,
)
from .keys import (
    KeyPair, generate_keypair, generate_keypair_async, keys_match,
    load_private_key, load_public_key, public_key_fingerprint,
)

__all__ = [
    "AuthenticationError",
    "CryptoError",
    "EntropyError",
    "Envelope",
    "FormatError",
    "KeyFormatError",
    "KeyPair",
    "MsgSealError",
    "SignatureError",
    "decrypt_message",
    "encrypt_message",
    "generate_keypair",
    "generate_keypair_async",
    "is_envelope",
    "keys_match",
    "load_private_key",
    "load_public_key",
    "public_key_fingerprint",
    "sign_message",
    "verify_signature",
]
