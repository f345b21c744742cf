from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Party:
    handle: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class DemographicArchetype:
    id: str
    name: str
    party_lean: Tuple[str, ...] = ()
    base_dissonance_threshold: float = 0.5

    def leans_toward(self, party_handle: str) -> bool:
        return party_handle in self.party_lean
