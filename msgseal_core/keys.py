"""
msgseal_core.keys
-----------------
RSA key material for msgseal:

- generate_keypair(): fresh 2048-bit / e=65537 pair as PEM text
- load_public_key() / load_private_key(): PEM -> library key objects
- keys_match(): do a public and a private key share a modulus
- public_key_fingerprint(): short, loggable identifier for a public key

Public keys travel as SubjectPublicKeyInfo PEM ("BEGIN PUBLIC KEY"),
private keys as PKCS#1 PEM ("BEGIN RSA PRIVATE KEY"). Parsed key objects
never outlive the call that loaded them.
"""

from __future__ import annotations
import asyncio
from typing import NamedTuple

from cryptography.exceptions import InternalError
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .constants import RSA_KEY_BITS, RSA_PUBLIC_EXPONENT
from .errors import CryptoError, EntropyError, KeyFormatError, translate
from .logger import get_logger
from .utils import BytesLike, random_bytes, sha256, to_bytes

log = get_logger("MsgSeal.Keys")


class KeyPair(NamedTuple):
    public_key: str
    private_key: str

    def __repr__(self) -> str:
        # never echo the private half
        try:
            fpr = public_key_fingerprint(self.public_key)
        except KeyFormatError:
            fpr = "<unparsable>"
        return f"KeyPair(fingerprint={fpr!r})"


def load_public_key(pem: BytesLike) -> rsa.RSAPublicKey:
    with translate(KeyFormatError, "public key could not be parsed"):
        key = serialization.load_pem_public_key(to_bytes(pem))
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyFormatError("public key is not an RSA key")
    return key


def load_private_key(pem: BytesLike) -> rsa.RSAPrivateKey:
    # PKCS#8 is accepted on input as well; encrypted PEM is not
    with translate(KeyFormatError, "private key could not be parsed"):
        key = serialization.load_pem_private_key(to_bytes(pem), password=None)
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyFormatError("private key is not an RSA key")
    return key


def modulus_size(key) -> int:
    """Modulus length in bytes; also the wrapped-key and signature length."""
    return (key.key_size + 7) // 8


def generate_keypair(bits: int = RSA_KEY_BITS, public_exponent: int = RSA_PUBLIC_EXPONENT) -> KeyPair:
    """
    Generate a new RSA keypair.

    Raises EntropyError when either the OS random source or OpenSSL's RNG
    cannot supply bytes, and CryptoError when the parameters are rejected.
    OpenSSL reports RNG failure and other internal faults the same way, so
    any internal error during key search is reported as EntropyError.
    Generating a 2048-bit key is CPU bound (tens to hundreds of ms); see
    generate_keypair_async() for event-loop callers.
    """
    random_bytes(1)  # fail fast without a usable OS RNG

    with translate(CryptoError, "RSA key generation failed"):
        try:
            private = rsa.generate_private_key(public_exponent=public_exponent, key_size=bits)
        except InternalError as e:
            raise EntropyError("RSA key search could not draw random bytes") from e
        public_pem = private.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        private_pem = private.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        )

    pair = KeyPair(public_key=public_pem.decode("ascii"), private_key=private_pem.decode("ascii"))
    log.debug(f"generated RSA-{bits} keypair fpr={public_key_fingerprint(pair.public_key)}")
    return pair


async def generate_keypair_async(bits: int = RSA_KEY_BITS, public_exponent: int = RSA_PUBLIC_EXPONENT) -> KeyPair:
    return await asyncio.to_thread(generate_keypair, bits, public_exponent)


def keys_match(public_key: BytesLike, private_key: BytesLike) -> bool:
    """True iff both keys parse and share the same modulus. Never raises."""
    try:
        pub = load_public_key(public_key)
        priv = load_private_key(private_key)
    except KeyFormatError:
        return False
    return pub.public_numbers().n == priv.private_numbers().public_numbers.n


def public_key_fingerprint(public_key: BytesLike) -> str:
    """
    Stable fingerprint for an RSA public key.

    - Input: PEM public key
    - Output: hex SHA256 of the DER SubjectPublicKeyInfo, truncated to 32 chars

    Safe to log; used to correlate envelopes with recipients.
    """
    return key_fingerprint(load_public_key(public_key))


def key_fingerprint(key: rsa.RSAPublicKey) -> str:
    der = key.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return sha256(der)[:32]
