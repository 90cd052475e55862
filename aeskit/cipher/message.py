"""Message codec: arbitrary-length byte strings over the 16-byte block cipher.

Padding rule: the sentinel byte is the message's last byte XOR 0x01, and
``32 - len % 16`` sentinels are appended (always 17..32 bytes). Decoding
strips the trailing run of whatever byte ends the decrypted buffer. Blocks
are processed independently, so they may be spread over worker threads.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List

from .block import Schedule, decrypt_block, encrypt_block
from .primitives import BLOCK_SIZE

logger = logging.getLogger(__name__)

PAD_SPAN = 2 * BLOCK_SIZE


def pad_message(data: bytes) -> bytes:
    if not data:
        raise ValueError("Cannot encode an empty message")
    sentinel = data[-1] ^ 0x01
    return bytes(data) + bytes([sentinel]) * (PAD_SPAN - len(data) % BLOCK_SIZE)


def strip_padding(data: bytes) -> bytes:
    """Drop the trailing run of the final byte value."""
    if not data:
        return b""
    sentinel = data[-1]
    run = 0
    for b in reversed(data):
        if b != sentinel:
            break
        run += 1
    if run == len(data):
        # No non-sentinel byte to anchor on; leave the buffer intact.
        return bytes(data)
    return bytes(data[:-run])


def split_blocks(data: bytes, fill: int) -> List[bytes]:
    blocks = []
    for i in range(0, len(data), BLOCK_SIZE):
        chunk = data[i:i + BLOCK_SIZE]
        if len(chunk) < BLOCK_SIZE:
            chunk = chunk + bytes([fill]) * (BLOCK_SIZE - len(chunk))
        blocks.append(chunk)
    return blocks


def _run_blocks(fn: Callable[[bytes, Schedule], bytes], blocks: List[bytes],
                schedule: Schedule, workers: int) -> bytes:
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if workers == 1 or len(blocks) < 2:
        out = [fn(b, schedule) for b in blocks]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            out = list(pool.map(lambda b: fn(b, schedule), blocks))
    logger.debug("%s: processed %d blocks (workers=%d)", fn.__name__, len(blocks), workers)
    return b"".join(out)


def encode_message(data: bytes, schedule: Schedule, *, workers: int = 1) -> bytes:
    padded = pad_message(data)
    blocks = split_blocks(padded, padded[-1])
    return _run_blocks(encrypt_block, blocks, schedule, workers)


def decode_message(data: bytes, schedule: Schedule, *, workers: int = 1) -> bytes:
    if not data or len(data) % BLOCK_SIZE != 0:
        raise ValueError(
            f"Ciphertext length must be a non-zero multiple of {BLOCK_SIZE}, got {len(data)}"
        )
    blocks = [bytes(data[i:i + BLOCK_SIZE]) for i in range(0, len(data), BLOCK_SIZE)]
    return strip_padding(_run_blocks(decrypt_block, blocks, schedule, workers))


@dataclass(frozen=True)
class PlainMessage:
    """Caller-supplied plaintext bytes awaiting encoding."""
    data: bytes

    def encode(self, schedule: Schedule, *, workers: int = 1) -> "CipherMessage":
        return CipherMessage(encode_message(self.data, schedule, workers=workers))


@dataclass(frozen=True)
class CipherMessage:
    """Encoded ciphertext, always a whole number of 16-byte blocks."""
    data: bytes

    def decode(self, schedule: Schedule, *, workers: int = 1) -> PlainMessage:
        return PlainMessage(decode_message(self.data, schedule, workers=workers))
