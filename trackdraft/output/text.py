"""Plain-text renderings of a project: structure overview and chord chart."""

import math
from typing import Dict, List

from ..core import Project, ProjectSection


BARS_PER_LINE = 4


def _clock(seconds: float) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


def _header(project: Project) -> List[str]:
    meta = project.metadata
    title = meta.title if not meta.artist else f"{meta.title} - {meta.artist}"
    return [
        title,
        f"Key: {meta.key.name} | {meta.bpm:g} BPM | "
        f"{meta.time_signature[0]}/{meta.time_signature[1]}",
    ]


def export_structure(project: Project) -> str:
    """
    Render the section list.

    Args:
        project: Project to render

    Returns:
        One header block plus a line per section: name, start bar, bar count,
        time range and progression id
    """
    lines = _header(project) + [""]
    width = max((len(s.name or s.type.value) for s in project.sections), default=0)

    for i, section in enumerate(project.sections, 1):
        name = section.name or section.type.value.capitalize()
        line = (
            f"{i:>2}. {name:<{width}}  bar {section.start_bar:>3}  "
            f"{section.bars:>2} bars  {_clock(section.start_time)}-{_clock(section.end_time)}"
        )
        if section.progression_id:
            line += f"  [{section.progression_id}]"
        lines.append(line)

    lines.append("")
    lines.append(f"{len(project.sections)} sections, {project.total_bars} bars")
    return "\n".join(lines)


def _bar_cells(section: ProjectSection) -> List[str]:
    """Chord names per bar; "%" repeats the previous bar's chord."""
    beats_per_bar = section.time_signature[0] or 4
    starts: Dict[int, List[str]] = {}
    for chord in section.chords:
        bar = max(0, int(math.floor(chord.start_beat / beats_per_bar)))
        if bar < section.bars:
            starts.setdefault(bar, []).append(chord.name)

    cells = []
    for bar in range(section.bars):
        if bar in starts:
            cells.append(" ".join(starts[bar]))
        elif cells:
            cells.append("%")
        else:
            cells.append("-")
    return cells


def export_chord_chart(project: Project, bars_per_line: int = BARS_PER_LINE) -> str:
    """
    Render a lead-sheet style chord chart.

    Args:
        project: Project to render
        bars_per_line: Bars written on each chart line

    Returns:
        Chart text with one block per section
    """
    lines = _header(project)

    for section in project.sections:
        name = section.name or section.type.value.capitalize()
        lines.append("")
        lines.append(f"[{name}] {section.bars} bars")
        cells = _bar_cells(section)
        for start in range(0, len(cells), bars_per_line):
            row = cells[start:start + bars_per_line]
            lines.append("| " + " | ".join(row) + " |")

    return "\n".join(lines)
