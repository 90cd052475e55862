import random
import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from aeskit.cipher.block import decrypt_block
from aeskit.cipher.key_schedule import expand_key
from aeskit.cipher.message import (
    CipherMessage,
    PlainMessage,
    decode_message,
    encode_message,
    pad_message,
    split_blocks,
    strip_padding,
)

SCHEDULE = expand_key(b"correct horse ba")


@pytest.mark.parametrize("length,padded_length", [
    (1, 32), (5, 32), (15, 32), (16, 48), (17, 48), (31, 48), (32, 64), (100, 128),
])
def test_pad_message_lengths(length, padded_length):
    data = bytes([7]) * length
    padded = pad_message(data)
    assert len(padded) == padded_length
    assert len(padded) - length >= 17
    assert padded[:length] == data
    assert set(padded[length:]) == {7 ^ 0x01}


def test_block_aligned_input_gets_two_full_blocks_of_padding():
    padded = pad_message(b"A" * 16)
    assert padded[16:] == bytes([ord("A") ^ 1]) * 32


def test_pad_rejects_empty_message():
    with pytest.raises(ValueError):
        pad_message(b"")
    with pytest.raises(ValueError):
        encode_message(b"", SCHEDULE)


def test_strip_padding():
    assert strip_padding(b"ab" + b"c" * 5) == b"ab"
    assert strip_padding(b"abc") == b"ab"
    assert strip_padding(b"zzzz") == b"zzzz"
    assert strip_padding(b"") == b""


def test_split_blocks_fills_short_tail():
    blocks = split_blocks(b"x" * 20, 0x55)
    assert blocks == [b"x" * 16, b"xxxx" + bytes([0x55]) * 12]


def test_encode_produces_whole_blocks():
    ct = encode_message(b"hello world", SCHEDULE)
    assert len(ct) == 32
    plain = decrypt_block(ct[16:], SCHEDULE)
    assert plain == bytes([ord("d") ^ 1]) * 16


def test_blocks_are_independent():
    # Identical plaintext blocks encrypt identically (no chaining).
    ct = encode_message(b"Q" * 32 + b"!", SCHEDULE)
    assert ct[0:16] == ct[16:32]


@pytest.mark.parametrize("length", [1, 2, 15, 16, 17, 31, 32, 33, 255, 1024])
def test_message_roundtrip(length):
    rng = random.Random(length)
    data = bytes(rng.randrange(256) for _ in range(length))
    assert decode_message(encode_message(data, SCHEDULE), SCHEDULE) == data


def test_message_roundtrip_random_keys():
    rng = random.Random(1337)
    for _ in range(20):
        schedule = expand_key(bytes(rng.randrange(256) for _ in range(16)))
        data = bytes(rng.randrange(256) for _ in range(rng.randint(1, 80)))
        assert decode_message(encode_message(data, schedule), schedule) == data


def test_trailing_run_in_plaintext_survives():
    data = b"abc" + b"\x00" * 20
    assert decode_message(encode_message(data, SCHEDULE), SCHEDULE) == data


@pytest.mark.parametrize("n", [0, 1, 15, 17, 33])
def test_decode_rejects_misaligned_ciphertext(n):
    with pytest.raises(ValueError):
        decode_message(bytes(n), SCHEDULE)


def test_parallel_matches_sequential():
    data = bytes(range(256)) * 3
    seq = encode_message(data, SCHEDULE)
    par = encode_message(data, SCHEDULE, workers=4)
    assert seq == par
    assert decode_message(par, SCHEDULE, workers=4) == data


def test_workers_must_be_positive():
    with pytest.raises(ValueError):
        encode_message(b"data", SCHEDULE, workers=0)


def test_phase_types():
    plain = PlainMessage(b"attack at dawn")
    cipher = plain.encode(SCHEDULE)
    assert isinstance(cipher, CipherMessage)
    assert cipher.data == encode_message(b"attack at dawn", SCHEDULE)
    assert cipher.decode(SCHEDULE) == plain
    assert not hasattr(cipher, "encode")
    assert not hasattr(plain, "decode")


_FILE_KEY = [0, 2, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]
IDENTICAL_KEYS = [bytes(_FILE_KEY)] * 11
DISTINCT_KEYS = [
    bytes([0, 2, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]),
    bytes([1, 3, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]),
    bytes([2, 4, 4, 8, 12, 1, 3, 5, 7, 9, 11, 113, 15, 2, 3, 4]),
    bytes([3, 5, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]),
    bytes([4, 6, 4, 8, 12, 1, 3, 5, 7, 9, 11, 123, 15, 2, 3, 4]),
    bytes([5, 7, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]),
    bytes([6, 8, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]),
    bytes([7, 2, 4, 8, 12, 1, 3, 5, 7, 9, 11, 123, 15, 2, 3, 4]),
    bytes([8, 2, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]),
    bytes([9, 2, 4, 8, 12, 1, 3, 5, 7, 9, 11, 143, 15, 2, 3, 4]),
    bytes([0, 2, 4, 8, 12, 1, 3, 5, 7, 9, 11, 13, 15, 2, 3, 4]),
]


@pytest.mark.parametrize("keys", [IDENTICAL_KEYS, DISTINCT_KEYS], ids=["identical", "distinct"])
@pytest.mark.parametrize("length", [1, 7, 16, 33, 69, 500])
def test_message_roundtrip_handmade_schedules(keys, length):
    text = (b"The quick brown fox jumps over the lazy dog.\n" * 12)[:length]
    ct = encode_message(text, keys)
    assert len(ct) % 16 == 0
    assert decode_message(ct, keys) == text
