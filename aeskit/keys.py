"""Password to 128-bit key material."""
from __future__ import annotations

from typing import Union

KEY_SIZE = 16


def derive_key(password: Union[str, bytes]) -> bytes:
    """Truncate or zero-pad a password to exactly 16 bytes.

    This is not a KDF: it keeps the first 16 bytes of the UTF-8 encoding.
    """
    raw = password.encode("utf-8") if isinstance(password, str) else bytes(password)
    if not raw:
        raise ValueError("Password must be specified.")
    return raw[:KEY_SIZE].ljust(KEY_SIZE, b"\0")
