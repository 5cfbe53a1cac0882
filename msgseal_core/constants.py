"""
msgseal_core.constants
----------------------
Wire-level constants. Changing any of these breaks compatibility with
envelopes and signatures that already exist on the ledger.
"""

ENCR_MARKER = b"MESSAGE:"
ENCR_MARKER_SIZE = len(ENCR_MARKER)     # 8

MSG_RECOGNIZE_TAG = b"MSG"              # prepended before AES, checked after

AES_KEY_SIZE = 32                       # AES-256 session key
AES_IV_SIZE = 16
AES_BLOCK_SIZE = 16

RSA_KEY_BITS = 2048
RSA_PUBLIC_EXPONENT = 65537
