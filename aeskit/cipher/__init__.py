"""Rijndael-style block cipher core and message codec."""

from .block import CipherBlock, PlainBlock, decrypt_block, encrypt_block
from .field import multiply
from .key_schedule import KeySchedule, expand_key
from .message import CipherMessage, PlainMessage, decode_message, encode_message

__all__ = [
    "CipherBlock",
    "PlainBlock",
    "encrypt_block",
    "decrypt_block",
    "multiply",
    "KeySchedule",
    "expand_key",
    "CipherMessage",
    "PlainMessage",
    "encode_message",
    "decode_message",
]
