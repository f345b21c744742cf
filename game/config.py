from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

NARRATIVE_COHERENCE = "narrative_coherence"
NARRATIVE_CONTROL = "narrative_control"
FACTION_INTEGRITY = "faction_integrity"
MORAL_CONDITIONING_INDEX = "moral_conditioning_index"

STARTING_WEEK = 1
STARTING_FUNDS = 5000
STARTING_PARTY_STATS: Dict[str, float] = {
    NARRATIVE_COHERENCE: 1.0,
    NARRATIVE_CONTROL: 0.8,
    FACTION_INTEGRITY: 0.7,
    MORAL_CONDITIONING_INDEX: 0.0,
}
BASE_LOYALTY = 0.7
OPPOSED_LOYALTY = 0.2

PRIORITY_LEVELS: Dict[str, int] = {"high": 1, "medium": 2, "low": 3}
UNKNOWN_PRIORITY_LEVEL = 4

RECOMMENDATION_LEVELS = (0, 2)
MAX_DIRECTIONS = 3
CYNICAL_THRESHOLD = 0.5

LOCK_MESSAGE = "Strategic direction must be selected before proceeding to Agenda Planning."
SELECTION_MESSAGE = "You must select a strategic direction to proceed to Agenda Planning."

DEFAULT_CONTENT_DIR = Path(__file__).resolve().parent / "data"


@dataclass
class BriefingConfig:
    content_dir: Path = DEFAULT_CONTENT_DIR
    max_directions: int = MAX_DIRECTIONS
    cynical_threshold: float = CYNICAL_THRESHOLD
    seed: Optional[int] = None
    log_level: str = "WARNING"


def load_briefing_config(env: Dict[str, str] | None = None) -> BriefingConfig:
    env = env if env is not None else os.environ
    content_dir = env.get("BRIEFING_CONTENT_DIR")
    seed_raw = (env.get("BRIEFING_SEED") or "").strip()
    max_directions = int(env.get("BRIEFING_MAX_DIRECTIONS", str(MAX_DIRECTIONS)))
    if max_directions < 0:
        raise ValueError("BRIEFING_MAX_DIRECTIONS must not be negative")
    return BriefingConfig(
        content_dir=Path(content_dir) if content_dir else DEFAULT_CONTENT_DIR,
        max_directions=max_directions,
        cynical_threshold=float(env.get("BRIEFING_CYNICAL_THRESHOLD", str(CYNICAL_THRESHOLD))),
        seed=int(seed_raw) if seed_raw else None,
        log_level=env.get("BRIEFING_LOG_LEVEL", "WARNING").strip().upper(),
    )


__all__ = ["BriefingConfig", "load_briefing_config"]
