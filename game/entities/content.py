from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class BriefingItem:
    """Advisor report template gated by a condition expression."""

    advisor: str
    message: str
    condition: str = "true"
    priority: str = "low"
    message_cynical: Optional[str] = None
    tags: Tuple[str, ...] = ()
    id: Optional[str] = None


@dataclass(frozen=True)
class StrategicDirection:
    """Selectable direction offered at the end of a briefing."""

    handle: str
    title: str
    condition: str = "true"
    narrative_hook: str = ""
    description: str = ""
    global_modifiers: Mapping[str, Any] = field(default_factory=dict)
    tags: Tuple[str, ...] = ()
    id: Optional[str] = None
