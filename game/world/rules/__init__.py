"""Threshold rules that drive the briefing's visual corruption layer."""

from .visual import (
    build_visual_manifest,
    calculate_fracture_state,
    calculate_glitch_intensity,
    calculate_palette_corruption,
    determine_aesthetic_mode,
)

__all__ = [
    "build_visual_manifest",
    "calculate_glitch_intensity",
    "calculate_fracture_state",
    "calculate_palette_corruption",
    "determine_aesthetic_mode",
]
