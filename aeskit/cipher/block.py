"""Single-block encryption and decryption.

Plaintext and ciphertext blocks are distinct types. Only :class:`PlainBlock`
has ``encrypt`` and only :class:`CipherBlock` has ``decrypt``, so encrypting a
block twice (or decrypting a plaintext) is rejected by a type checker instead
of at runtime.

Every round applies MixColumns, including the last one. Output therefore does
not match FIPS-197 test vectors, but encrypt and decrypt are exact inverses.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .primitives import (
    BLOCK_SIZE,
    add_round_key,
    inv_mix_columns,
    inv_rotate_rows,
    inv_substitute,
    mix_columns,
    rotate_rows,
    substitute,
)

Schedule = Sequence[bytes]


def _check_schedule(schedule: Schedule) -> None:
    if len(schedule) < 2:
        raise ValueError(f"Key schedule needs at least 2 round keys, got {len(schedule)}")


def encrypt_block(plaintext_block: bytes, schedule: Schedule) -> bytes:
    if len(plaintext_block) != BLOCK_SIZE:
        raise ValueError(f"Plaintext block must be {BLOCK_SIZE} bytes")
    _check_schedule(schedule)

    state = add_round_key(bytes(plaintext_block), schedule[0])
    for k in range(1, len(schedule)):
        state = substitute(state)
        state = rotate_rows(state)
        state = mix_columns(state)
        state = add_round_key(state, schedule[k])
    return state


def decrypt_block(ciphertext_block: bytes, schedule: Schedule) -> bytes:
    if len(ciphertext_block) != BLOCK_SIZE:
        raise ValueError(f"Ciphertext block must be {BLOCK_SIZE} bytes")
    _check_schedule(schedule)

    last = len(schedule) - 1
    state = add_round_key(bytes(ciphertext_block), schedule[last])
    for k in reversed(range(last)):
        state = inv_mix_columns(state)
        state = inv_rotate_rows(state)
        state = inv_substitute(state)
        state = add_round_key(state, schedule[k])
    return state


@dataclass(frozen=True)
class PlainBlock:
    """A 16-byte plaintext block; the only phase that can be encrypted."""
    data: bytes

    def __post_init__(self):
        if len(self.data) != BLOCK_SIZE:
            raise ValueError(f"Plaintext block must be {BLOCK_SIZE} bytes")
        object.__setattr__(self, "data", bytes(self.data))

    def encrypt(self, schedule: Schedule) -> "CipherBlock":
        return CipherBlock(encrypt_block(self.data, schedule))


@dataclass(frozen=True)
class CipherBlock:
    """A 16-byte ciphertext block; the only phase that can be decrypted."""
    data: bytes

    def __post_init__(self):
        if len(self.data) != BLOCK_SIZE:
            raise ValueError(f"Ciphertext block must be {BLOCK_SIZE} bytes")
        object.__setattr__(self, "data", bytes(self.data))

    def decrypt(self, schedule: Schedule) -> PlainBlock:
        return PlainBlock(decrypt_block(self.data, schedule))
