from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from game import config
from game.config import BriefingConfig
from game.engines.conditions import ConditionEvaluator
from game.engines.rng import RNG
from game.entities import BriefingItem, StrategicDirection
from game.output.schema import (
    AdvisorReport,
    BriefingPacket,
    StrategicDirectionOption,
    StrategicDirections,
)
from game.world.catalog import ContentCatalog
from game.world.rules import build_visual_manifest
from game.world.state import GameState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
StateInput = Union[GameState, Mapping[str, Any], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def priority_to_number(priority: Any) -> int:
    return config.PRIORITY_LEVELS.get(priority, config.UNKNOWN_PRIORITY_LEVEL)


def _text(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


@dataclass
class BriefingCompositor:
    """Turns a weekly game-state snapshot into a briefing packet.

    The compositor only holds its read-only inputs; every call builds a new
    evaluator and a new packet, so one instance can serve any number of states.
    """

    catalog: ContentCatalog
    rng: RNG = field(default_factory=RNG)
    clock: Clock = _utc_now
    settings: BriefingConfig = field(default_factory=BriefingConfig)

    def generate_briefing(self, game_state: StateInput) -> BriefingPacket:
        state = game_state if isinstance(game_state, GameState) else GameState.from_mapping(game_state)
        evaluator = ConditionEvaluator.for_state(state)

        packet = BriefingPacket(
            advisor_reports=self.generate_advisor_reports(state, evaluator),
            visual_manifest=build_visual_manifest(state),
            strategic_directions=self.generate_strategic_directions(evaluator),
        )
        logger.info(
            "briefing.generated",
            extra={
                "week": state.week,
                "reports": len(packet.advisor_reports),
                "directions": packet.strategic_directions.count,
                "aesthetic_mode": packet.visual_manifest.aesthetic_mode,
            },
        )
        return packet

    # ------------------------------------------------------------------
    # Advisor reports
    # ------------------------------------------------------------------
    def generate_advisor_reports(
        self, state: GameState, evaluator: ConditionEvaluator
    ) -> List[AdvisorReport]:
        grouped: Dict[str, List[BriefingItem]] = {}
        for item in self.catalog.briefing_items:
            if evaluator.evaluate(item.condition):
                grouped.setdefault(item.advisor, []).append(item)

        timestamp = self.clock().isoformat()
        reports: List[AdvisorReport] = []
        for advisor, items in grouped.items():
            try:
                reports.append(self._format_advisor_report(advisor, items, state, timestamp))
            except ValidationError as exc:
                logger.warning(
                    "briefing.record.invalid",
                    extra={"advisor": _text(advisor), "error": str(exc)},
                )
        reports.sort(key=lambda report: report.priority_level)
        return reports

    def _format_advisor_report(
        self,
        advisor: str,
        items: List[BriefingItem],
        state: GameState,
        timestamp: str,
    ) -> AdvisorReport:
        # Largest rank number wins (low beats high); first item on ties.
        item = max(items, key=lambda candidate: priority_to_number(candidate.priority))
        return AdvisorReport(
            advisor=_text(advisor),
            priority=_text(item.priority, "unknown"),
            priority_level=priority_to_number(item.priority),
            message=self._select_message(item, state),
            tags=[_text(tag) for tag in item.tags or ()],
            timestamp=timestamp,
        )

    def _select_message(self, item: BriefingItem, state: GameState) -> str:
        moral_index = state.stat(config.MORAL_CONDITIONING_INDEX, 0.0)
        if moral_index > self.settings.cynical_threshold and item.message_cynical:
            return _text(item.message_cynical)
        return _text(item.message)

    # ------------------------------------------------------------------
    # Strategic directions
    # ------------------------------------------------------------------
    def generate_strategic_directions(self, evaluator: ConditionEvaluator) -> StrategicDirections:
        options: List[StrategicDirectionOption] = []
        for direction in self.catalog.strategic_directions:
            if not evaluator.evaluate(direction.condition):
                continue
            try:
                options.append(self._format_strategic_direction(direction))
            except ValidationError as exc:
                logger.warning(
                    "briefing.record.invalid",
                    extra={"handle": _text(direction.handle), "error": str(exc)},
                )
        options.sort(key=lambda option: option.recommendation_level)
        selected = options[: self.settings.max_directions]
        return StrategicDirections(available_directions=selected, count=len(selected))

    def _format_strategic_direction(self, direction: StrategicDirection) -> StrategicDirectionOption:
        return StrategicDirectionOption(
            id=None if direction.id is None else str(direction.id),
            handle=_text(direction.handle),
            title=_text(direction.title),
            narrative_hook=_text(direction.narrative_hook),
            description=_text(direction.description),
            global_modifiers=dict(direction.global_modifiers or {}),
            tags=[_text(tag) for tag in direction.tags or ()],
            recommendation_level=self.rng.randint(*config.RECOMMENDATION_LEVELS),
        )


def generate_briefing(
    game_state: StateInput,
    catalog: ContentCatalog,
    *,
    rng: Optional[RNG] = None,
    clock: Optional[Clock] = None,
    settings: Optional[BriefingConfig] = None,
) -> BriefingPacket:
    compositor = BriefingCompositor(
        catalog=catalog,
        rng=rng or RNG(),
        clock=clock or _utc_now,
        settings=settings or BriefingConfig(),
    )
    return compositor.generate_briefing(game_state)


__all__ = ["BriefingCompositor", "generate_briefing", "priority_to_number"]
