from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Message codec
    workers: int = Field(default=1, ge=1, le=64, description="Threads used for per-block work")

    # Evaluation
    roundtrip_vectors: int = Field(default=1000, ge=1)
    sac_trials: int = Field(default=200, ge=1)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Paths
    runs_dir: str = Field(default="runs")

    verbose: bool = Field(default=False)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    def _bool(name: str, default: bool) -> bool:
        v = os.getenv(name)
        if v is None:
            return default
        return v.strip().lower() in {"1", "true", "yes", "y", "on"}

    return Settings(
        workers=int(os.getenv("AESKIT_WORKERS", "1")),
        roundtrip_vectors=int(os.getenv("AESKIT_ROUNDTRIP_VECTORS", "1000")),
        sac_trials=int(os.getenv("AESKIT_SAC_TRIALS", "200")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        runs_dir=os.getenv("AESKIT_RUNS_DIR", "runs"),
        verbose=_bool("AESKIT_VERBOSE", False),
    )
