"""aeskit: a from-scratch Rijndael-style block cipher with a padded message codec.

Research / education only. Do NOT use in production.
"""

from .cipher import (
    CipherBlock,
    CipherMessage,
    KeySchedule,
    PlainBlock,
    PlainMessage,
    decode_message,
    decrypt_block,
    encode_message,
    encrypt_block,
    expand_key,
    multiply,
)
from .keys import derive_key

__all__ = [
    "CipherBlock",
    "CipherMessage",
    "KeySchedule",
    "PlainBlock",
    "PlainMessage",
    "decode_message",
    "decrypt_block",
    "encode_message",
    "encrypt_block",
    "expand_key",
    "multiply",
    "derive_key",
]

__version__ = "0.1.0"
