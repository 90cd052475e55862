"""Deterministic evaluation of the block cipher and message codec.

Roundtrip verification and Strict Avalanche Criterion analysis.
"""

from .roundtrip import RoundtripResult, RoundtripFailure, run_roundtrip_tests
from .avalanche import SACResult, compute_sac
from .report import EvaluationReport

__all__ = [
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "SACResult",
    "compute_sac",
    "EvaluationReport",
]
