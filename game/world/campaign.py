from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from game import config
from game.entities import Demographic, DemographicArchetype, Party
from game.world import loaders
from game.world.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class CampaignGenerator:
    """Builds the week-one game state for a chosen party archetype."""

    parties: Dict[str, Party]
    archetypes: List[DemographicArchetype]

    @classmethod
    def from_files(cls, base_path: Optional[Path] = None) -> "CampaignGenerator":
        data_root = base_path or config.DEFAULT_CONTENT_DIR
        return cls(
            parties=loaders.load_parties(data_root / "parties.yaml"),
            archetypes=loaders.load_demographic_archetypes(data_root / "demographics.yaml"),
        )

    def run(self, party_handle: str) -> GameState:
        party = self.parties.get(party_handle)
        if party is None:
            raise ValueError(f"Unknown party handle '{party_handle}'")

        state = GameState(
            party_stats=dict(config.STARTING_PARTY_STATS),
            demographics=tuple(self._initial_demographic(archetype, party) for archetype in self.archetypes),
            week=config.STARTING_WEEK,
            funds=config.STARTING_FUNDS,
        )
        logger.info(
            "campaign.generated",
            extra={"party": party.handle, "demographics": len(state.demographics)},
        )
        return state

    @staticmethod
    def _initial_demographic(archetype: DemographicArchetype, party: Party) -> Demographic:
        is_base = archetype.leans_toward(party.handle)
        return Demographic(
            id=archetype.id,
            name=archetype.name,
            stats={
                "loyalty": config.BASE_LOYALTY if is_base else config.OPPOSED_LOYALTY,
                "dissonance": 0.0,
                "tolerance": archetype.base_dissonance_threshold,
                "active_narratives": {},
            },
        )
