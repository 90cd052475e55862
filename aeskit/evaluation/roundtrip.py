"""Roundtrip verification P = D(E(P, K), K) at block and message level.

Draws random keys, blocks and messages from a seeded generator and checks
that decryption exactly inverts encryption for every vector.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

from aeskit.cipher.block import decrypt_block, encrypt_block
from aeskit.cipher.key_schedule import expand_key
from aeskit.cipher.message import decode_message, encode_message

logger = logging.getLogger(__name__)

MAX_MESSAGE_LEN = 96


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    level: str               # "block" or "message"
    plaintext_hex: str
    key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of a roundtrip run."""
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["success_rate"] = self.success_rate
        return d

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] roundtrip: {self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def _check(
    index: int,
    level: str,
    pt: bytes,
    key: bytes,
    encrypt: Callable[[bytes], bytes],
    decrypt: Callable[[bytes], bytes],
) -> Optional[RoundtripFailure]:
    try:
        ct = encrypt(pt)
        pt2 = decrypt(ct)
    except Exception as exc:
        return RoundtripFailure(index, level, pt.hex(), key.hex(), "<error>", "<error>", str(exc))
    if pt2 == pt:
        return None
    return RoundtripFailure(index, level, pt.hex(), key.hex(), ct.hex(), pt2.hex(), None)


def run_roundtrip_tests(
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    max_failures_recorded: int = 10,
    workers: int = 1,
) -> RoundtripResult:
    """Run block and message roundtrips across ``num_vectors`` random vectors.

    A vector passes only if both its block and its message roundtrip hold.

    Args:
        num_vectors: Number of random (key, block, message) triples.
        seed: Random seed for deterministic reproducibility.
        max_failures_recorded: Maximum number of failure details to keep.
        workers: Thread count handed to the message codec.
    """
    if num_vectors < 1:
        raise ValueError("num_vectors must be >= 1")

    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    logger.info("Roundtrip run started: %d vectors, seed=%d", num_vectors, seed)
    start = time.perf_counter()

    for i in range(num_vectors):
        key = _rand_bytes(rng, 16)
        block = _rand_bytes(rng, 16)
        message = _rand_bytes(rng, rng.randint(1, MAX_MESSAGE_LEN))
        schedule = expand_key(key)

        vector_failures = [
            f for f in (
                _check(i, "block", block, key,
                       lambda b: encrypt_block(b, schedule),
                       lambda b: decrypt_block(b, schedule)),
                _check(i, "message", message, key,
                       lambda m: encode_message(m, schedule, workers=workers),
                       lambda m: decode_message(m, schedule, workers=workers)),
            ) if f is not None
        ]
        if not vector_failures:
            passed += 1
            continue

        failed += 1
        for f in vector_failures:
            logger.warning("Vector %d failed at %s level: %s", i, f.level, f.error or "mismatch")
            if len(failures) < max_failures_recorded:
                failures.append(f)

    elapsed = time.perf_counter() - start
    logger.info("Roundtrip run finished: %d passed, %d failed", passed, failed)

    return RoundtripResult(
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
