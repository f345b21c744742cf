from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class Demographic:
    name: str
    stats: Mapping[str, Any] = field(default_factory=dict)
    id: Optional[Any] = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Demographic":
        nested = payload.get("stats")
        stats = {str(k): v for k, v in nested.items()} if isinstance(nested, Mapping) else {}
        stats.update(
            (str(k), v)
            for k, v in payload.items()
            if k not in ("id", "name") and not (k == "stats" and isinstance(nested, Mapping))
        )
        return cls(name=str(payload.get("name") or ""), stats=stats, id=payload.get("id"))

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.lower()

    def to_mapping(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id, "name": self.name}
        payload.update(self.stats)
        return payload
