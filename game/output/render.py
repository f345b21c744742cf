from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from game.output.schema import BriefingPacket


@dataclass
class SectionLine:
    text: str
    priority: int


class BriefingRenderer:
    """Console renderer for a briefing packet (sectioned text or JSON)."""

    def __init__(self, *, view: str = "text", max_lines: int = 80) -> None:
        if view not in {"text", "json"}:
            raise ValueError("view must be 'text' or 'json'")
        if max_lines < 1:
            raise ValueError("max_lines must be at least 1")
        self.view = view
        self.max_lines = max_lines

    def render(self, packet: BriefingPacket) -> str:
        if self.view == "json":
            return packet.model_dump_json(indent=2)
        return "\n".join(self._text_lines(packet))

    def present(self, packet: BriefingPacket) -> None:
        print(self.render(packet))

    def _text_lines(self, packet: BriefingPacket) -> List[str]:
        sections = self._build_sections(packet)
        lines: List[str] = []
        for title in ("advisor reports", "visual manifest", "strategic directions"):
            entries = sections.get(title, [])
            lines.append(f"[{title.upper()}]")
            if not entries:
                lines.append("  (none)")
            for entry in sorted(entries, key=lambda line: line.priority):
                lines.append(f"  {entry.text}")
            lines.append("")
        lines.append(f"LOCKED: {packet.lock_message}" if packet.agenda_locked else "UNLOCKED")

        if len(lines) > self.max_lines:
            hidden = len(lines) - self.max_lines + 1
            lines = lines[: self.max_lines - 1] + [f"... {hidden} more line(s) truncated"]
        return lines

    def _build_sections(self, packet: BriefingPacket) -> Dict[str, List[SectionLine]]:
        sections: Dict[str, List[SectionLine]] = {}

        for report in packet.advisor_reports:
            tags = f" [{', '.join(report.tags)}]" if report.tags else ""
            sections.setdefault("advisor reports", []).append(
                SectionLine(
                    text=f"{report.advisor} ({report.priority}): {report.message}{tags}",
                    priority=report.priority_level,
                )
            )

        manifest = packet.visual_manifest
        glitch = manifest.glitch_intensity
        fracture = manifest.fracture_state
        palette = manifest.palette_corruption
        sections["visual manifest"] = [
            SectionLine(f"Aesthetic mode: {manifest.aesthetic_mode}", 1),
            SectionLine(
                f"Glitch: {glitch.level} (aberration {glitch.chromatic_aberration:.2f}, noise {glitch.ui_noise:.2f})",
                2,
            ),
            SectionLine(
                f"Fracture: {fracture.level} (icons {fracture.icon_corruption:.0%}, "
                f"breaks {'on' if fracture.visual_breaks else 'off'})",
                3,
            ),
            SectionLine(
                f"Palette: {palette.level} -> {palette.shift_direction} ({palette.corruption_percentage:.0%})",
                4,
            ),
        ]

        directions = packet.strategic_directions
        for index, option in enumerate(directions.available_directions, start=1):
            sections.setdefault("strategic directions", []).append(
                SectionLine(
                    text=f"{index}. {option.title} [{option.handle}] - {option.narrative_hook}",
                    priority=index,
                )
            )
        if directions.selection_required:
            sections.setdefault("strategic directions", []).append(
                SectionLine(text=directions.message, priority=len(directions.available_directions) + 1)
            )
        return sections


__all__ = ["BriefingRenderer", "SectionLine"]
