from __future__ import annotations

from datetime import datetime, timezone

import pytest

from game.entities import BriefingItem, StrategicDirection
from game.world.catalog import ContentCatalog

FIXED_NOW = datetime(2025, 11, 3, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def crisis_state() -> dict:
    return {
        "week": 4,
        "party_stats": {
            "narrative_coherence": 0.3,
            "narrative_control": 0.5,
            "faction_integrity": 0.5,
            "moral_conditioning_index": 0.0,
        },
        "demographics": [
            {"id": 1, "name": "Older Voters", "loyalty": 0.6, "dissonance": 0.2},
            {"id": 2, "name": "Youth", "loyalty": 0.3, "dissonance": 0.7},
        ],
    }


@pytest.fixture()
def small_catalog() -> ContentCatalog:
    items = [
        BriefingItem(
            advisor="Chief of Staff",
            condition="party.narrative_coherence < 0.4",
            priority="high",
            message="The narrative is fracturing.",
            message_cynical="The narrative is fracturing; the base is trained to ignore it.",
            tags=("narrative",),
        ),
        BriefingItem(
            advisor="Pollster",
            condition="demographics.youth.loyalty < 0.5",
            priority="medium",
            message="Youth loyalty is sliding.",
        ),
        BriefingItem(
            advisor="Media Director",
            condition="false",
            priority="high",
            message="Never shown.",
        ),
    ]
    directions = [
        StrategicDirection(
            id="sd_unify",
            handle="unify_message",
            title="Unify the Message",
            condition="party.narrative_coherence < 0.7",
            narrative_hook="One voice.",
            global_modifiers={"narrative_coherence": 0.15},
        ),
        StrategicDirection(
            id="sd_grassroots",
            handle="grassroots_push",
            title="Grassroots Push",
            condition="true",
            narrative_hook="Knock on doors.",
        ),
        StrategicDirection(
            id="sd_purge",
            handle="purge_dissent",
            title="Purge the Dissenters",
            condition="party.faction_integrity < 0.3",
            narrative_hook="Unity through subtraction.",
        ),
    ]
    return ContentCatalog.of(items, directions)


@pytest.fixture()
def bundled_catalog() -> ContentCatalog:
    return ContentCatalog.from_files()
