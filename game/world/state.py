from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from game.entities import Demographic


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalise_demographic(entry: Any) -> Optional[Demographic]:
    if isinstance(entry, Demographic):
        return entry
    if isinstance(entry, Mapping):
        return Demographic.from_mapping(entry)
    name = getattr(entry, "name", None)
    if name is None:
        return None
    attributes = {k: v for k, v in getattr(entry, "__dict__", {}).items() if not k.startswith("_")}
    attributes["name"] = name
    return Demographic.from_mapping(attributes)


def normalise_demographics(raw: Any) -> Tuple[Demographic, ...]:
    if not raw:
        return ()
    if isinstance(raw, Mapping):
        # name -> stats shorthand
        return tuple(
            Demographic(name=str(name), stats=dict(stats) if isinstance(stats, Mapping) else {})
            for name, stats in raw.items()
        )
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        return ()
    demographics = (_normalise_demographic(entry) for entry in raw)
    return tuple(demo for demo in demographics if demo is not None)


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of one campaign week."""

    party_stats: Mapping[str, Any] = field(default_factory=dict)
    demographics: Tuple[Demographic, ...] = ()
    week: int = 1
    funds: float = 0.0

    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]]) -> "GameState":
        payload = payload if isinstance(payload, Mapping) else {}
        party_stats = payload.get("party_stats", payload.get("partyStats"))
        if not isinstance(party_stats, Mapping):
            party_stats = {}
        week = payload.get("week", 1)
        funds = payload.get("funds", 0.0)
        return cls(
            party_stats=dict(party_stats),
            demographics=normalise_demographics(payload.get("demographics")),
            week=int(week) if is_number(week) else 1,
            funds=float(funds) if is_number(funds) else 0.0,
        )

    @classmethod
    def from_file(cls, path: Path) -> "GameState":
        if not path.exists():
            raise FileNotFoundError(f"Expected game state JSON at {path}")
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Expected object at {path}, got {type(payload).__name__}")
        return cls.from_mapping(payload)

    def stat(self, name: str, default: float) -> float:
        value = self.party_stats.get(name)
        return value if is_number(value) else default

    def find_demographic(self, name: str) -> Optional[Demographic]:
        for demographic in self.demographics:
            if demographic.matches(name):
                return demographic
        return None

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "week": self.week,
            "funds": self.funds,
            "party_stats": dict(self.party_stats),
            "demographics": [demo.to_mapping() for demo in self.demographics],
        }

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_mapping(), indent=2), encoding="utf-8")
