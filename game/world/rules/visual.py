from __future__ import annotations

from game import config
from game.output.schema import FractureState, GlitchIntensity, PaletteCorruption, VisualManifest
from game.world.state import GameState

SICKLY = "sickly_yellow_green"


def calculate_glitch_intensity(state: GameState) -> GlitchIntensity:
    coherence = state.stat(config.NARRATIVE_COHERENCE, 1.0)
    control = state.stat(config.NARRATIVE_CONTROL, 1.0)
    avg_narrative = (coherence + control) / 2.0

    if avg_narrative < 0.3:
        return GlitchIntensity(level="severe", chromatic_aberration=0.15, ui_noise=0.8)
    if avg_narrative < 0.5:
        return GlitchIntensity(level="high", chromatic_aberration=0.10, ui_noise=0.5)
    if avg_narrative < 0.7:
        return GlitchIntensity(level="medium", chromatic_aberration=0.05, ui_noise=0.2)
    return GlitchIntensity(level="low", chromatic_aberration=0.0, ui_noise=0.0)


def calculate_fracture_state(state: GameState) -> FractureState:
    integrity = state.stat(config.FACTION_INTEGRITY, 1.0)

    if integrity < 0.3:
        return FractureState(level="critical", icon_corruption=0.9, visual_breaks=True)
    if integrity < 0.5:
        return FractureState(level="severe", icon_corruption=0.6, visual_breaks=True)
    if integrity < 0.7:
        return FractureState(level="moderate", icon_corruption=0.3, visual_breaks=False)
    return FractureState(level="stable", icon_corruption=0.0, visual_breaks=False)


def calculate_palette_corruption(state: GameState) -> PaletteCorruption:
    moral_index = state.stat(config.MORAL_CONDITIONING_INDEX, 0.0)

    if moral_index > 0.7:
        return PaletteCorruption(
            level="severe",
            shift_direction=SICKLY,
            primary_color_override="#b5d96f",
            secondary_color_override="#e8d96f",
            corruption_percentage=0.8,
        )
    if moral_index > 0.5:
        return PaletteCorruption(
            level="moderate",
            shift_direction=SICKLY,
            primary_color_override="#d4e89f",
            secondary_color_override="#f0e8a8",
            corruption_percentage=0.5,
        )
    if moral_index > 0.3:
        return PaletteCorruption(
            level="low",
            shift_direction=SICKLY,
            primary_color_override="rgba(212, 232, 159, 0.2)",
            secondary_color_override="rgba(240, 232, 168, 0.2)",
            corruption_percentage=0.2,
        )
    return PaletteCorruption(level="none", shift_direction="cyan", corruption_percentage=0.0)


def determine_aesthetic_mode(state: GameState) -> str:
    coherence = state.stat(config.NARRATIVE_COHERENCE, 1.0)
    moral_index = state.stat(config.MORAL_CONDITIONING_INDEX, 0.0)

    if coherence > 0.8 and moral_index < 0.3:
        return "pristine"
    if coherence > 0.6 and moral_index > 0.6:
        return "unified"
    if coherence < 0.5:
        return "fractured"
    if moral_index > 0.7:
        return "corrupted"
    return "standard"


def build_visual_manifest(state: GameState) -> VisualManifest:
    return VisualManifest(
        glitch_intensity=calculate_glitch_intensity(state),
        fracture_state=calculate_fracture_state(state),
        palette_corruption=calculate_palette_corruption(state),
        aesthetic_mode=determine_aesthetic_mode(state),
    )
