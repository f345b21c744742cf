"""Entity definitions for the briefing engine."""

from .content import BriefingItem, StrategicDirection
from .demographic import Demographic
from .party import DemographicArchetype, Party

__all__ = [
    "BriefingItem",
    "StrategicDirection",
    "Demographic",
    "DemographicArchetype",
    "Party",
]
