"""
msgseal_core.crypto
-------------------
Implements the message-protection primitives for msgseal:

- RSA-OAEP + AES-256-CBC: single-recipient envelope encryption
  (encrypt_message / decrypt_message)
- RSA PKCS#1 v1.5 over SHA-256: detached signatures
  (sign_message / verify_signature)

Every call builds its own cipher, padding and OAEP contexts, so the
functions are safe to call from independent threads without locking.

The only integrity check on an envelope is the 3-byte recognition tag
recovered after decryption. It catches a wrong key or corrupted ciphertext
with high probability but it is not a MAC: a tampered envelope can, rarely,
decrypt to garbage that still carries the tag.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import padding as sym_padding
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .constants import AES_IV_SIZE, AES_KEY_SIZE, MSG_RECOGNIZE_TAG
from .envelope import Envelope, check_marker
from .errors import (
    AuthenticationError, CryptoError, FormatError, KeyFormatError,
    MsgSealError, SignatureError, translate,
)
from .keys import key_fingerprint, load_private_key, load_public_key, modulus_size
from .logger import get_logger
from .utils import BytesLike, random_bytes, to_bytes

log = get_logger("MsgSeal.Crypto")


def _oaep() -> padding.OAEP:
    # OpenSSL RSA_PKCS1_OAEP_PADDING defaults; existing envelopes use SHA-1
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA1()),
        algorithm=hashes.SHA1(),
        label=None,
    )


def _payload(data: BytesLike, kind) -> bytes:
    try:
        return to_bytes(data)
    except TypeError as e:
        raise kind("message must be bytes or str") from e


# --------- AES-256-CBC + PKCS#7 ----------
def _aes_encrypt(key: bytes, iv: bytes, data: bytes) -> bytes:
    padder = sym_padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(data) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()

def _aes_decrypt(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = sym_padding.PKCS7(algorithms.AES.block_size).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


# --------- Envelope encryption ----------
def encrypt_message(plaintext: BytesLike, recipient_public_key: BytesLike) -> bytes:
    """
    Encrypt plaintext for the holder of recipient_public_key.

    Returns MARKER || wrapped_key || iv || ciphertext. For a 2048-bit key the
    envelope is 8 + 256 + 16 + len(ciphertext) bytes.

    Raises KeyFormatError, EntropyError or CryptoError; nothing is returned
    on failure.
    """
    data = _payload(plaintext, CryptoError)
    public_key = load_public_key(recipient_public_key)

    session_key = random_bytes(AES_KEY_SIZE)
    iv = random_bytes(AES_IV_SIZE)

    with translate(CryptoError, "message encryption failed"):
        ciphertext = _aes_encrypt(session_key, iv, MSG_RECOGNIZE_TAG + data)
        wrapped_key = public_key.encrypt(session_key, _oaep())
    del session_key

    if len(wrapped_key) != modulus_size(public_key):
        raise CryptoError("wrapped key length does not match recipient key size")

    envelope = Envelope(wrapped_key=wrapped_key, iv=iv, ciphertext=ciphertext)
    log.debug(f"encrypted {len(data)} bytes for fpr={key_fingerprint(public_key)} envelope={len(envelope)} bytes")
    return envelope.to_bytes()


def decrypt_message(envelope: BytesLike, recipient_private_key: BytesLike) -> bytes:
    """
    Recover the plaintext of an envelope produced by encrypt_message().

    Framing is checked first (FormatError), then the session key is
    unwrapped (CryptoError on OAEP failure or a key that is not 32 bytes),
    then the body is decrypted (CryptoError on bad padding) and the
    recognition tag checked (AuthenticationError).
    """
    try:
        if not isinstance(envelope, (bytes, bytearray, memoryview)):
            raise FormatError("envelope must be bytes")
        data = bytes(envelope)
        check_marker(data)

        private_key = load_private_key(recipient_private_key)
        env = Envelope.from_bytes(data, modulus_size(private_key))

        with translate(CryptoError, "session key could not be unwrapped"):
            session_key = private_key.decrypt(env.wrapped_key, _oaep())
        if len(session_key) != AES_KEY_SIZE:
            raise CryptoError("unwrapped session key has the wrong length")

        with translate(CryptoError, "message decryption failed"):
            decrypted = _aes_decrypt(session_key, env.iv, env.ciphertext)
        del session_key

        if decrypted[:len(MSG_RECOGNIZE_TAG)] != MSG_RECOGNIZE_TAG:
            raise AuthenticationError("recognition tag mismatch")
    except MsgSealError as e:
        log.warning(f"envelope rejected: {type(e).__name__}: {e}")
        raise

    return decrypted[len(MSG_RECOGNIZE_TAG):]


# --------- RSA signatures (sign/verify) ----------
def sign_message(private_key: BytesLike, message: BytesLike) -> bytes:
    """Sign the SHA-256 digest of message. Signature length == modulus bytes."""
    key = load_private_key(private_key)
    data = _payload(message, CryptoError)

    with translate(CryptoError, "message signing failed"):
        signature = key.sign(data, padding.PKCS1v15(), hashes.SHA256())

    if len(signature) != modulus_size(key):
        raise CryptoError("signature length does not match key size")
    return signature


def verify_signature(public_key: BytesLike, message: BytesLike, signature: bytes) -> bool:
    """
    Check a detached signature.

    Returns True for an authentic signature and False when the check ran and
    did not match (other message, other signer). Raises SignatureError when
    the check cannot run: unparsable key, non-bytes or wrong-length signature.
    """
    try:
        key = load_public_key(public_key)
    except KeyFormatError as e:
        raise SignatureError("verification key could not be parsed") from e

    if not isinstance(signature, (bytes, bytearray, memoryview)):
        raise SignatureError("signature must be bytes")
    signature = bytes(signature)
    if len(signature) != modulus_size(key):
        raise SignatureError("signature length does not match key size")

    data = _payload(message, SignatureError)
    try:
        key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature:
        log.debug(f"signature mismatch for fpr={key_fingerprint(key)}")
        return False
    return True
