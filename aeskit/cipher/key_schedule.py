"""AES-128 style key expansion.

Always yields 11 round keys: the input key followed by 10 derived keys.
"""
from __future__ import annotations

from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .primitives import AES_SBOX, BLOCK_SIZE, xor_bytes

RCON: Tuple[int, ...] = (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36)


@dataclass(frozen=True)
class KeySchedule(SequenceABC):
    """Ordered, immutable sequence of 16-byte round keys."""
    round_keys: Tuple[bytes, ...]

    def __post_init__(self):
        keys = tuple(bytes(k) for k in self.round_keys)
        for i, k in enumerate(keys):
            if len(k) != BLOCK_SIZE:
                raise ValueError(f"Round key {i} must be 16 bytes, got {len(k)}")
        object.__setattr__(self, "round_keys", keys)

    @classmethod
    def from_keys(cls, keys: Sequence[bytes]) -> "KeySchedule":
        return cls(round_keys=tuple(keys))

    def __len__(self) -> int:
        return len(self.round_keys)

    def __getitem__(self, index: int) -> bytes:
        return self.round_keys[index]

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.round_keys)

    def __reversed__(self) -> Iterator[bytes]:
        return reversed(self.round_keys)


def _rot_word(word: bytes) -> bytes:
    return word[1:] + word[:1]


def _sub_word(word: bytes) -> bytes:
    return bytes(AES_SBOX[b] for b in word)


def next_round_key(round_key: bytes, iteration: int) -> bytes:
    """Derive round key ``iteration + 1`` from round key ``iteration``."""
    temp = bytearray(_sub_word(_rot_word(round_key[12:16])))
    temp[0] ^= RCON[iteration]
    words: List[bytes] = [xor_bytes(bytes(temp), round_key[0:4])]
    for i in range(1, 4):
        words.append(xor_bytes(words[-1], round_key[4 * i:4 * i + 4]))
    return b"".join(words)


def expand_key(key: bytes) -> KeySchedule:
    """Expand a 16-byte key into an 11-entry :class:`KeySchedule`."""
    if len(key) != BLOCK_SIZE:
        raise ValueError(f"Key must be 16 bytes, got {len(key)}")
    keys = [bytes(key)]
    for i in range(len(RCON)):
        keys.append(next_round_key(keys[-1], i))
    return KeySchedule(round_keys=tuple(keys))
