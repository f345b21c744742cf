from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from game.entities import BriefingItem, DemographicArchetype, Party, StrategicDirection


def _read_yaml(path: Path) -> List[dict]:
    if not path.exists():
        raise FileNotFoundError(f"Expected YAML data file at {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or []
        if not isinstance(payload, list):
            raise ValueError(f"Expected list at {path}, got {type(payload).__name__}")
        return payload


def _require(row: Mapping[str, Any], keys: tuple, path: Path) -> None:
    if not isinstance(row, Mapping):
        raise ValueError(f"Expected mapping entries in {path}, got {type(row).__name__}")
    missing = [key for key in keys if not row.get(key)]
    if missing:
        raise ValueError(f"Entry in {path} is missing required field(s): {', '.join(missing)}")


def _condition(row: Mapping[str, Any]) -> str:
    condition = row.get("condition")
    if condition is None:
        return "true"
    if isinstance(condition, bool):
        return "true" if condition else "false"
    return str(condition)


def load_briefing_items(path: Path) -> List[BriefingItem]:
    items: List[BriefingItem] = []
    for row in _read_yaml(path):
        _require(row, ("advisor", "message"), path)
        cynical = row.get("message_cynical")
        items.append(
            BriefingItem(
                id=str(row["id"]) if row.get("id") is not None else None,
                advisor=str(row["advisor"]),
                condition=_condition(row),
                priority=str(row.get("priority", "low")),
                message=str(row["message"]),
                message_cynical=str(cynical) if cynical else None,
                tags=tuple(str(tag) for tag in row.get("tags") or []),
            )
        )
    return items


def load_strategic_directions(path: Path) -> List[StrategicDirection]:
    directions: List[StrategicDirection] = []
    for row in _read_yaml(path):
        _require(row, ("handle", "title"), path)
        modifiers = row.get("global_modifiers") or {}
        if not isinstance(modifiers, Mapping):
            raise ValueError(f"global_modifiers for '{row['handle']}' in {path} must be a mapping")
        directions.append(
            StrategicDirection(
                id=str(row.get("id", row["handle"])),
                handle=str(row["handle"]),
                title=str(row["title"]),
                condition=_condition(row),
                narrative_hook=str(row.get("narrative_hook", "")),
                description=str(row.get("description", "")),
                global_modifiers={str(k): v for k, v in modifiers.items()},
                tags=tuple(str(tag) for tag in row.get("tags") or []),
            )
        )
    return directions


def load_parties(path: Path) -> Dict[str, Party]:
    parties: Dict[str, Party] = {}
    for row in _read_yaml(path):
        _require(row, ("handle",), path)
        party = Party(
            handle=str(row["handle"]),
            name=str(row.get("name", row["handle"])),
            description=str(row.get("description", "")),
        )
        parties[party.handle] = party
    return parties


def load_demographic_archetypes(path: Path) -> List[DemographicArchetype]:
    archetypes: List[DemographicArchetype] = []
    for row in _read_yaml(path):
        _require(row, ("id", "name"), path)
        archetypes.append(
            DemographicArchetype(
                id=str(row["id"]),
                name=str(row["name"]),
                party_lean=tuple(str(handle) for handle in row.get("party_lean") or []),
                base_dissonance_threshold=float(row.get("base_dissonance_threshold", 0.5)),
            )
        )
    return archetypes
