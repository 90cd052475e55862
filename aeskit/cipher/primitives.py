"""Block transform primitives over a 16-byte state.

The state is a 4x4 byte matrix in row-major order: byte index ``4*row + col``.
Every function takes a 16-byte buffer and returns a new ``bytes`` object; the
input is never mutated.
"""

from __future__ import annotations

from typing import List, Sequence

from .field import multiply

BLOCK_SIZE = 16
ROWS = 4
COLS = 4


# ============================================================================
# UTILITIES
# ============================================================================

def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte strings of equal length."""
    if len(a) != len(b):
        raise ValueError("xor_bytes length mismatch")
    return bytes(x ^ y for x, y in zip(a, b))


def _check_state(data: bytes, name: str) -> None:
    if len(data) != BLOCK_SIZE:
        raise ValueError(f"{name} requires 16-byte state, got {len(data)} bytes")


# ============================================================================
# AES S-BOX (8-bit)
# ============================================================================

AES_SBOX: List[int] = [
    0x63,0x7c,0x77,0x7b,0xf2,0x6b,0x6f,0xc5,0x30,0x01,0x67,0x2b,0xfe,0xd7,0xab,0x76,
    0xca,0x82,0xc9,0x7d,0xfa,0x59,0x47,0xf0,0xad,0xd4,0xa2,0xaf,0x9c,0xa4,0x72,0xc0,
    0xb7,0xfd,0x93,0x26,0x36,0x3f,0xf7,0xcc,0x34,0xa5,0xe5,0xf1,0x71,0xd8,0x31,0x15,
    0x04,0xc7,0x23,0xc3,0x18,0x96,0x05,0x9a,0x07,0x12,0x80,0xe2,0xeb,0x27,0xb2,0x75,
    0x09,0x83,0x2c,0x1a,0x1b,0x6e,0x5a,0xa0,0x52,0x3b,0xd6,0xb3,0x29,0xe3,0x2f,0x84,
    0x53,0xd1,0x00,0xed,0x20,0xfc,0xb1,0x5b,0x6a,0xcb,0xbe,0x39,0x4a,0x4c,0x58,0xcf,
    0xd0,0xef,0xaa,0xfb,0x43,0x4d,0x33,0x85,0x45,0xf9,0x02,0x7f,0x50,0x3c,0x9f,0xa8,
    0x51,0xa3,0x40,0x8f,0x92,0x9d,0x38,0xf5,0xbc,0xb6,0xda,0x21,0x10,0xff,0xf3,0xd2,
    0xcd,0x0c,0x13,0xec,0x5f,0x97,0x44,0x17,0xc4,0xa7,0x7e,0x3d,0x64,0x5d,0x19,0x73,
    0x60,0x81,0x4f,0xdc,0x22,0x2a,0x90,0x88,0x46,0xee,0xb8,0x14,0xde,0x5e,0x0b,0xdb,
    0xe0,0x32,0x3a,0x0a,0x49,0x06,0x24,0x5c,0xc2,0xd3,0xac,0x62,0x91,0x95,0xe4,0x79,
    0xe7,0xc8,0x37,0x6d,0x8d,0xd5,0x4e,0xa9,0x6c,0x56,0xf4,0xea,0x65,0x7a,0xae,0x08,
    0xba,0x78,0x25,0x2e,0x1c,0xa6,0xb4,0xc6,0xe8,0xdd,0x74,0x1f,0x4b,0xbd,0x8b,0x8a,
    0x70,0x3e,0xb5,0x66,0x48,0x03,0xf6,0x0e,0x61,0x35,0x57,0xb9,0x86,0xc1,0x1d,0x9e,
    0xe1,0xf8,0x98,0x11,0x69,0xd9,0x8e,0x94,0x9b,0x1e,0x87,0xe9,0xce,0x55,0x28,0xdf,
    0x8c,0xa1,0x89,0x0d,0xbf,0xe6,0x42,0x68,0x41,0x99,0x2d,0x0f,0xb0,0x54,0xbb,0x16,
]
AES_INV_SBOX: List[int] = [0] * 256
for _i, _v in enumerate(AES_SBOX):
    AES_INV_SBOX[_v] = _i


def substitute(data: bytes) -> bytes:
    """Apply the AES S-box to each byte."""
    return bytes(AES_SBOX[b] for b in data)


def inv_substitute(data: bytes) -> bytes:
    """Apply the inverse AES S-box to each byte."""
    return bytes(AES_INV_SBOX[b] for b in data)


# ============================================================================
# ROW ROTATION
# ============================================================================

def rotate_row(row: Sequence[int], shift: int) -> bytes:
    """Rotate a row left by ``shift``: element i lands at (i + len - shift) % len."""
    n = len(row)
    if n != COLS:
        raise ValueError(f"rotate_row requires a {COLS}-byte row, got {n}")
    shift %= n
    out = bytearray(n)
    for i, v in enumerate(row):
        out[(i + n - shift) % n] = v
    return bytes(out)


def rotate_rows(data: bytes) -> bytes:
    """Row r rotated left by r positions."""
    _check_state(data, "rotate_rows")
    out = bytearray()
    for r in range(ROWS):
        out += rotate_row(data[r * COLS:(r + 1) * COLS], r)
    return bytes(out)


def inv_rotate_rows(data: bytes) -> bytes:
    """Row r rotated left by (4 - r) mod 4 positions, undoing :func:`rotate_rows`."""
    _check_state(data, "inv_rotate_rows")
    out = bytearray()
    for r in range(ROWS):
        out += rotate_row(data[r * COLS:(r + 1) * COLS], (COLS - r) % COLS)
    return bytes(out)


# ============================================================================
# COLUMN DIFFUSION
# ============================================================================

def mix_column(col: Sequence[int]) -> bytes:
    """MixColumns on a single 4-byte column."""
    if len(col) != ROWS:
        raise ValueError(f"mix_column requires a {ROWS}-byte column")
    a0, a1, a2, a3 = col
    return bytes([
        multiply(a0, 2) ^ multiply(a1, 3) ^ a2 ^ a3,
        a0 ^ multiply(a1, 2) ^ multiply(a2, 3) ^ a3,
        a0 ^ a1 ^ multiply(a2, 2) ^ multiply(a3, 3),
        multiply(a0, 3) ^ a1 ^ a2 ^ multiply(a3, 2),
    ])


def inv_mix_column(col: Sequence[int]) -> bytes:
    """Inverse MixColumns on a single 4-byte column."""
    if len(col) != ROWS:
        raise ValueError(f"inv_mix_column requires a {ROWS}-byte column")
    a0, a1, a2, a3 = col
    return bytes([
        multiply(a0, 14) ^ multiply(a1, 11) ^ multiply(a2, 13) ^ multiply(a3, 9),
        multiply(a0, 9) ^ multiply(a1, 14) ^ multiply(a2, 11) ^ multiply(a3, 13),
        multiply(a0, 13) ^ multiply(a1, 9) ^ multiply(a2, 14) ^ multiply(a3, 11),
        multiply(a0, 11) ^ multiply(a1, 13) ^ multiply(a2, 9) ^ multiply(a3, 14),
    ])


def _map_columns(data: bytes, fn) -> bytes:
    out = bytearray(BLOCK_SIZE)
    for c in range(COLS):
        mixed = fn(data[c::COLS])
        for r in range(ROWS):
            out[r * COLS + c] = mixed[r]
    return bytes(out)


def mix_columns(data: bytes) -> bytes:
    """MixColumns over all four columns (row-major state)."""
    _check_state(data, "mix_columns")
    return _map_columns(data, mix_column)


def inv_mix_columns(data: bytes) -> bytes:
    """Inverse MixColumns over all four columns (row-major state)."""
    _check_state(data, "inv_mix_columns")
    return _map_columns(data, inv_mix_column)


# ============================================================================
# ROUND KEY
# ============================================================================

def add_round_key(data: bytes, round_key: bytes) -> bytes:
    _check_state(data, "add_round_key")
    if len(round_key) != BLOCK_SIZE:
        raise ValueError(f"Round key must be 16 bytes, got {len(round_key)}")
    return xor_bytes(data, round_key)
