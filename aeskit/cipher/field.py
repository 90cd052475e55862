"""GF(2^8) arithmetic under the Rijndael reduction polynomial.

x^8 + x^4 + x^3 + x + 1 (0x11B). Only the low byte 0x1B is folded back in
after each shift since the x^8 term is dropped by the 8-bit mask.
"""
from __future__ import annotations

REDUCTION = 0x1B


def multiply(a: int, b: int) -> int:
    """Multiply two bytes in GF(2^8) (shift-and-XOR)."""
    if not (0 <= a <= 0xFF and 0 <= b <= 0xFF):
        raise ValueError(f"GF(2^8) operands must be bytes, got {a!r}, {b!r}")
    res = 0
    for _ in range(8):
        if b & 1:
            res ^= a
        hi = a & 0x80
        a = (a << 1) & 0xFF
        if hi:
            a ^= REDUCTION
        b >>= 1
    return res
