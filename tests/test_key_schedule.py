import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from aeskit.cipher.key_schedule import KeySchedule, expand_key, next_round_key


def test_zero_key_first_round_key():
    schedule = expand_key(bytes(16))
    assert schedule[0] == bytes(16)
    assert schedule[1] == bytes([0x62, 0x63, 0x63, 0x63] * 4)
    assert schedule[2] == bytes.fromhex("9b9898c9f9fbfbaa9b9898c9f9fbfbaa")
    assert schedule[10] == bytes.fromhex("b4ef5bcb3e92e21123e951cf6f8f188e")


def test_fips197_key_expansion():
    schedule = expand_key(bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"))
    assert schedule[1] == bytes.fromhex("a0fafe1788542cb123a339392a6c7605")
    assert schedule[10] == bytes.fromhex("d014f9a8c9ee2589e13f0cc8b6630ca6")


def test_schedule_always_has_eleven_keys():
    import random

    rng = random.Random(7)
    for _ in range(20):
        key = bytes(rng.randrange(256) for _ in range(16))
        schedule = expand_key(key)
        assert len(schedule) == 11
        assert all(len(k) == 16 for k in schedule)
        assert schedule[0] == key


def test_expansion_is_deterministic():
    key = b"YELLOW SUBMARINE"
    assert expand_key(key) == expand_key(key)


def test_next_round_key_chains():
    schedule = expand_key(b"0123456789abcdef")
    for i in range(10):
        assert next_round_key(schedule[i], i) == schedule[i + 1]


@pytest.mark.parametrize("n", [0, 15, 17, 24, 32])
def test_expand_key_rejects_other_lengths(n):
    with pytest.raises(ValueError):
        expand_key(bytes(n))


def test_key_schedule_validates_round_keys():
    with pytest.raises(ValueError):
        KeySchedule.from_keys([bytes(16), bytes(8)])


def test_key_schedule_is_a_sequence():
    keys = [bytes([i] * 16) for i in range(3)]
    schedule = KeySchedule.from_keys(keys)
    assert list(schedule) == keys
    assert list(reversed(schedule)) == keys[::-1]
