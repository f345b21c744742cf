from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from game import config


class GlitchIntensity(BaseModel):
    level: Literal["severe", "high", "medium", "low"]
    chromatic_aberration: float
    ui_noise: float


class FractureState(BaseModel):
    level: Literal["critical", "severe", "moderate", "stable"]
    icon_corruption: float
    visual_breaks: bool


class PaletteCorruption(BaseModel):
    level: Literal["severe", "moderate", "low", "none"]
    shift_direction: str
    primary_color_override: Optional[str] = None
    secondary_color_override: Optional[str] = None
    corruption_percentage: float


class VisualManifest(BaseModel):
    """UI corruption parameters derived from party stat thresholds."""

    glitch_intensity: GlitchIntensity
    fracture_state: FractureState
    palette_corruption: PaletteCorruption
    aesthetic_mode: Literal["pristine", "unified", "fractured", "corrupted", "standard"]


class AdvisorReport(BaseModel):
    advisor: str
    priority: str
    priority_level: int
    message: str
    tags: List[str] = Field(default_factory=list)
    timestamp: str


class StrategicDirectionOption(BaseModel):
    id: Optional[str] = None
    handle: str
    title: str
    narrative_hook: str = ""
    description: str = ""
    global_modifiers: Dict[str, Any] = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)
    recommendation_level: int = Field(ge=0, le=2)


class StrategicDirections(BaseModel):
    available_directions: List[StrategicDirectionOption] = Field(default_factory=list)
    count: int = 0
    selection_required: bool = True
    message: str = config.SELECTION_MESSAGE


class BriefingPacket(BaseModel):
    """Everything the presentation layer needs for one weekly briefing."""

    advisor_reports: List[AdvisorReport] = Field(default_factory=list)
    visual_manifest: VisualManifest
    strategic_directions: StrategicDirections
    agenda_locked: bool = True
    lock_message: str = config.LOCK_MESSAGE


__all__ = [
    "AdvisorReport",
    "BriefingPacket",
    "FractureState",
    "GlitchIntensity",
    "PaletteCorruption",
    "StrategicDirectionOption",
    "StrategicDirections",
    "VisualManifest",
]
