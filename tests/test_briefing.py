from __future__ import annotations

import copy

from game import config
from game.config import BriefingConfig
from game.engines.briefing import BriefingCompositor, generate_briefing, priority_to_number
from game.engines.rng import RNG
from game.entities import BriefingItem, StrategicDirection
from game.world.catalog import ContentCatalog
from game.world.state import GameState


def _state(coherence=0.5, control=0.6, integrity=0.4, moral=0.3, demographics=None) -> dict:
    return {
        "week": 1,
        "party_stats": {
            "narrative_coherence": coherence,
            "narrative_control": control,
            "faction_integrity": integrity,
            "moral_conditioning_index": moral,
        },
        "demographics": demographics or [],
    }


def test_packet_carries_every_layer(crisis_state, small_catalog, fixed_clock):
    packet = generate_briefing(crisis_state, small_catalog, rng=RNG(1), clock=fixed_clock)

    assert packet.agenda_locked is True
    assert packet.lock_message == config.LOCK_MESSAGE
    manifest = packet.visual_manifest
    assert manifest.glitch_intensity.level == "high"
    assert manifest.fracture_state.level == "moderate"
    assert manifest.aesthetic_mode == "fractured"

    directions = packet.strategic_directions
    assert directions.selection_required is True
    assert directions.message == config.SELECTION_MESSAGE
    assert 1 <= len(directions.available_directions) <= 3
    assert directions.count == len(directions.available_directions)


def test_advisor_item_gated_by_condition(small_catalog, fixed_clock):
    included = generate_briefing(_state(coherence=0.3), small_catalog, clock=fixed_clock)
    excluded = generate_briefing(_state(coherence=0.5), small_catalog, clock=fixed_clock)

    assert "Chief of Staff" in {report.advisor for report in included.advisor_reports}
    assert "Chief of Staff" not in {report.advisor for report in excluded.advisor_reports}


def test_reports_sorted_high_priority_first(crisis_state, small_catalog, fixed_clock):
    packet = generate_briefing(crisis_state, small_catalog, clock=fixed_clock)
    reports = packet.advisor_reports

    assert [report.advisor for report in reports] == ["Chief of Staff", "Pollster"]
    assert [report.priority_level for report in reports] == [1, 2]
    assert reports[0].tags == ["narrative"]
    assert reports[0].timestamp == fixed_clock().isoformat()


def test_cynical_variant_used_above_threshold(small_catalog, fixed_clock):
    plain = generate_briefing(_state(coherence=0.3, moral=0.5), small_catalog, clock=fixed_clock)
    cynical = generate_briefing(_state(coherence=0.3, moral=0.8), small_catalog, clock=fixed_clock)

    assert plain.advisor_reports[0].message == "The narrative is fracturing."
    assert "trained" in cynical.advisor_reports[0].message


def test_cynical_threshold_falls_back_to_default_without_variant(fixed_clock):
    catalog = ContentCatalog.of([BriefingItem(advisor="Pollster", message="Plain.", condition="true")])
    packet = generate_briefing(_state(moral=0.9), catalog, clock=fixed_clock)
    assert packet.advisor_reports[0].message == "Plain."


def test_lowest_priority_item_wins_within_advisor(fixed_clock):
    catalog = ContentCatalog.of(
        [
            BriefingItem(advisor="Whip", message="urgent", priority="high"),
            BriefingItem(advisor="Whip", message="minor", priority="low"),
            BriefingItem(advisor="Whip", message="routine", priority="medium"),
            BriefingItem(advisor="Whip", message="minor again", priority="low"),
        ]
    )
    packet = generate_briefing(_state(), catalog, clock=fixed_clock)

    assert len(packet.advisor_reports) == 1
    report = packet.advisor_reports[0]
    assert report.message == "minor"
    assert report.priority == "low"
    assert report.priority_level == 3


def test_priority_ranks():
    assert [priority_to_number(p) for p in ("high", "medium", "low", "urgent", "")] == [1, 2, 3, 4, 4]


def test_unknown_priority_sorts_last(fixed_clock):
    catalog = ContentCatalog.of(
        [
            BriefingItem(advisor="Archivist", message="?", priority="someday"),
            BriefingItem(advisor="Media", message="!", priority="high"),
        ]
    )
    packet = generate_briefing(_state(), catalog, clock=fixed_clock)
    assert [(r.advisor, r.priority_level) for r in packet.advisor_reports] == [("Media", 1), ("Archivist", 4)]


def test_bad_content_record_does_not_break_briefing(fixed_clock):
    catalog = ContentCatalog.of(
        [
            BriefingItem(advisor="Broken", message="x", condition="party.narrative_coherence ## 1"),
            BriefingItem(advisor="Broken", message="y", condition='party.narrative_coherence > "high"'),
            BriefingItem(advisor="Working", message="ok"),
        ]
    )
    packet = generate_briefing(_state(), catalog, clock=fixed_clock)
    assert [report.advisor for report in packet.advisor_reports] == ["Working"]


def test_directions_capped_at_three(fixed_clock):
    directions = [
        StrategicDirection(handle=f"dir_{index}", title=f"Direction {index}") for index in range(6)
    ]
    catalog = ContentCatalog.of(strategic_directions=directions)
    for seed in range(10):
        packet = generate_briefing(_state(), catalog, rng=RNG(seed), clock=fixed_clock)
        options = packet.strategic_directions.available_directions
        assert len(options) == 3
        levels = [option.recommendation_level for option in options]
        assert levels == sorted(levels)
        assert all(0 <= level <= 2 for level in levels)


def test_direction_cap_follows_settings(fixed_clock):
    directions = [StrategicDirection(handle=f"dir_{index}", title="t") for index in range(4)]
    catalog = ContentCatalog.of(strategic_directions=directions)
    packet = generate_briefing(
        _state(), catalog, clock=fixed_clock, settings=BriefingConfig(max_directions=2)
    )
    assert packet.strategic_directions.count == 2


def test_no_matching_directions_still_requires_selection(fixed_clock):
    catalog = ContentCatalog.of(
        strategic_directions=[StrategicDirection(handle="never", title="Never", condition="false")]
    )
    packet = generate_briefing(_state(), catalog, clock=fixed_clock)
    directions = packet.strategic_directions.model_dump()

    assert directions["available_directions"] == []
    assert directions["count"] == 0
    assert directions["selection_required"] is True


def test_direction_fields_are_formatted(crisis_state, small_catalog, fixed_clock):
    packet = generate_briefing(crisis_state, small_catalog, rng=RNG(3), clock=fixed_clock)
    by_handle = {option.handle: option for option in packet.strategic_directions.available_directions}

    assert set(by_handle) == {"unify_message", "grassroots_push"}
    unify = by_handle["unify_message"]
    assert unify.id == "sd_unify"
    assert unify.title == "Unify the Message"
    assert unify.narrative_hook == "One voice."
    assert unify.global_modifiers == {"narrative_coherence": 0.15}


def test_same_seed_gives_same_selection(fixed_clock):
    directions = [StrategicDirection(handle=f"dir_{index}", title="t") for index in range(8)]
    catalog = ContentCatalog.of(strategic_directions=directions)

    first = generate_briefing(_state(), catalog, rng=RNG(42), clock=fixed_clock)
    second = generate_briefing(_state(), catalog, rng=RNG(42), clock=fixed_clock)
    assert first.strategic_directions == second.strategic_directions


def test_repeated_calls_are_pure(crisis_state, small_catalog, fixed_clock):
    snapshot = copy.deepcopy(crisis_state)
    compositor = BriefingCompositor(catalog=small_catalog, clock=fixed_clock)

    first = compositor.generate_briefing(crisis_state)
    second = compositor.generate_briefing(crisis_state)

    assert crisis_state == snapshot
    assert first.advisor_reports == second.advisor_reports
    assert first.visual_manifest == second.visual_manifest
    handles = lambda packet: {o.handle for o in packet.strategic_directions.available_directions}
    assert handles(first) == handles(second)
    assert first is not second


def test_compositor_keeps_no_state_between_states(small_catalog, fixed_clock):
    compositor = BriefingCompositor(catalog=small_catalog, clock=fixed_clock)
    healthy = compositor.generate_briefing(_state(0.9, 0.9, 0.9, 0.0))
    broken = compositor.generate_briefing(_state(0.2, 0.2, 0.2, 0.9))
    healthy_again = compositor.generate_briefing(_state(0.9, 0.9, 0.9, 0.0))

    assert healthy.visual_manifest.glitch_intensity.level != broken.visual_manifest.glitch_intensity.level
    assert healthy.visual_manifest.palette_corruption.level != broken.visual_manifest.palette_corruption.level
    assert healthy.advisor_reports == healthy_again.advisor_reports
    assert healthy.visual_manifest == healthy_again.visual_manifest


def test_partially_initialised_state_is_tolerated(small_catalog, fixed_clock):
    for state in ({}, None, {"party_stats": None, "demographics": None}, GameState()):
        packet = generate_briefing(state, small_catalog, clock=fixed_clock)
        assert packet.visual_manifest.glitch_intensity.level == "low"
        assert packet.visual_manifest.aesthetic_mode == "pristine"
        assert packet.agenda_locked is True


def test_bundled_content_flags_narrative_crisis(bundled_catalog, fixed_clock):
    packet = generate_briefing(
        _state(coherence=0.3, control=0.5, integrity=0.5, moral=0.0), bundled_catalog, clock=fixed_clock
    )
    crisis = [report for report in packet.advisor_reports if report.priority == "high"]
    assert crisis
    assert any("fractur" in report.message for report in crisis)


def test_bundled_content_turns_cynical(bundled_catalog, fixed_clock):
    packet = generate_briefing(
        _state(coherence=0.3, control=0.4, integrity=0.5, moral=0.8), bundled_catalog, clock=fixed_clock
    )
    assert any("trained" in report.message or "conditioned" in report.message for report in packet.advisor_reports)


def test_bundled_directions_for_healthy_party(bundled_catalog, fixed_clock):
    packet = generate_briefing(
        _state(coherence=0.8, control=0.8, integrity=0.7, moral=0.2), bundled_catalog, clock=fixed_clock
    )
    options = packet.strategic_directions.available_directions
    assert 0 < len(options) <= 3
    for option in options:
        assert option.title
        assert option.narrative_hook
        assert isinstance(option.global_modifiers, dict)


def test_non_string_direction_id_and_tags_are_kept(fixed_clock):
    catalog = ContentCatalog.of(
        strategic_directions=[
            StrategicDirection(id=1, handle="first", title="First", tags=("media", 7)),
            StrategicDirection(handle="second", title="Second"),
        ]
    )
    packet = generate_briefing(_state(), catalog, rng=RNG(0), clock=fixed_clock)
    by_handle = {option.handle: option for option in packet.strategic_directions.available_directions}

    assert set(by_handle) == {"first", "second"}
    assert by_handle["first"].id == "1"
    assert by_handle["first"].tags == ["media", "7"]
    assert by_handle["second"].id is None


def test_loosely_typed_advisor_items_still_report(fixed_clock):
    catalog = ContentCatalog.of(
        [
            BriefingItem(advisor="Whip", message="Count the votes.", priority="high"),
            BriefingItem(advisor="Archivist", message="Filed.", priority=None, tags=(2024, "archive")),
        ]
    )
    packet = generate_briefing(_state(), catalog, clock=fixed_clock)
    reports = {report.advisor: report for report in packet.advisor_reports}

    assert reports["Whip"].message == "Count the votes."
    assert reports["Archivist"].priority == "unknown"
    assert reports["Archivist"].priority_level == 4
    assert reports["Archivist"].tags == ["2024", "archive"]
