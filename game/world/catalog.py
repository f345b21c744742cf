from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from game import config
from game.entities import BriefingItem, StrategicDirection
from game.world import loaders

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentCatalog:
    """Read-only advisor and strategic-direction tables handed to the compositor."""

    briefing_items: Tuple[BriefingItem, ...] = ()
    strategic_directions: Tuple[StrategicDirection, ...] = ()

    @classmethod
    def of(
        cls,
        briefing_items: Iterable[BriefingItem] = (),
        strategic_directions: Iterable[StrategicDirection] = (),
    ) -> "ContentCatalog":
        return cls(tuple(briefing_items), tuple(strategic_directions))

    @classmethod
    def from_files(cls, base_path: Optional[Path] = None) -> "ContentCatalog":
        data_root = base_path or config.DEFAULT_CONTENT_DIR
        items = loaders.load_briefing_items(data_root / "briefing_items.yaml")
        directions = loaders.load_strategic_directions(data_root / "strategic_directions.yaml")
        logger.info(
            "catalog.loaded",
            extra={"content_dir": str(data_root), "items": len(items), "directions": len(directions)},
        )
        return cls.of(items, directions)
