"""Structured evaluation report builder.

Aggregates roundtrip and SAC results into a single serializable report.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .avalanche import SACResult
from .roundtrip import RoundtripResult


@dataclass
class EvaluationReport:
    timestamp: str = ""
    roundtrip: Optional[RoundtripResult] = None
    sac_results: List[SACResult] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "roundtrip": self.roundtrip.to_dict() if self.roundtrip else None,
            "sac": [s.to_dict() for s in self.sac_results],
            "summary": {
                "roundtrip_pass": self.roundtrip.is_perfect if self.roundtrip else None,
                "sac_all_pass": all(s.passes_sac for s in self.sac_results),
                "failing_checks": self.failing_checks(),
            },
        }

    def to_summary(self) -> str:
        lines = [f"Evaluation Report - {self.timestamp}", "=" * 50]
        if self.roundtrip:
            lines.append(f"  {self.roundtrip.summary()}")
        for s in self.sac_results:
            lines.append(f"  {s.summary()}")
        return "\n".join(lines)

    def failing_checks(self) -> List[str]:
        out: List[str] = []
        if self.roundtrip and not self.roundtrip.is_perfect:
            out.append("roundtrip")
        out.extend(f"sac.{s.input_type}" for s in self.sac_results if not s.passes_sac)
        return out
