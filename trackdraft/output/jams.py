"""JAMS export.

Writes a project back out as a JAMS document that the JAMS importer reads
back into the same sections, bar counts and chords. Bar counts and section
ids that JAMS has no field for are kept under sandbox.trackdraft.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from ..analysis import format_chord_symbol
from ..core import Project
from ..core.constants import JAMS_VERSION

CORPUS = "TrackDraft"


def _annotation(namespace: str, data: List[Dict[str, Any]], duration: float) -> Dict[str, Any]:
    return {
        "namespace": namespace,
        "data": data,
        "annotation_metadata": {
            "corpus": CORPUS,
            "annotation_tools": "trackdraft",
            "data_source": "project export",
        },
        "sandbox": {},
        "time": 0.0,
        "duration": duration,
    }


def _observation(time: float, duration: float, value: Any, confidence: Any = None) -> Dict[str, Any]:
    return {"time": time, "duration": duration, "value": value, "confidence": confidence}


def project_to_jams(project: Project) -> Dict[str, Any]:
    """
    Build a JAMS document for a project.

    Args:
        project: Project to export

    Returns:
        JAMS document as a JSON-ready dict
    """
    duration = project.total_duration or max(
        (s.end_time for s in project.sections), default=0.0
    )

    segments = []
    chords = []
    for section in project.sections:
        segments.append(_observation(
            section.start_time, section.duration, section.name or section.type.value, 1.0
        ))
        seconds_per_beat = 60.0 / section.tempo
        for chord in section.chords:
            chords.append(_observation(
                section.start_time + chord.start_beat * seconds_per_beat,
                chord.duration * seconds_per_beat,
                format_chord_symbol(chord.chord),
                chord.confidence,
            ))

    annotations = [
        _annotation("segment_open", segments, duration),
        _annotation("chord", chords, duration),
        _annotation("key_mode", [_observation(0.0, duration, project.key.harte, 1.0)], duration),
        _annotation("tempo", [_observation(0.0, duration, project.metadata.bpm, 1.0)], duration),
    ]

    return {
        "file_metadata": {
            "title": project.metadata.title,
            "artist": project.metadata.artist or "",
            "release": project.metadata.album or "",
            "duration": duration,
            "identifiers": {"source": CORPUS},
            "jams_version": JAMS_VERSION,
        },
        "annotations": annotations,
        "sandbox": {
            "trackdraft": {
                "version": project.version,
                "sections": [
                    {"id": s.id, "type": s.type.value, "bars": s.bars}
                    for s in project.sections
                ],
                "progressions": [p.to_dict() for p in project.progressions],
            },
        },
    }


def export_jams(project: Project, output_path: str, indent: int = 2) -> None:
    """Write a project as a .jams file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(project_to_jams(project), f, indent=indent, ensure_ascii=False)
