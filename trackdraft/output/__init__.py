"""Output layer - Export projects to various formats.

This layer handles writing projects as:
- Project JSON (lossless, reloadable)
- JAMS (for MIR tools, re-importable)
- Plain text structure and chord charts
- MIDI block chords
"""

from .json_export import export_project_json, load_project_json
from .jams import project_to_jams, export_jams
from .text import export_structure, export_chord_chart
from .midi import MIDIExporter

__all__ = [
    "export_project_json",
    "load_project_json",
    "project_to_jams",
    "export_jams",
    "export_structure",
    "export_chord_chart",
    "MIDIExporter",
]
