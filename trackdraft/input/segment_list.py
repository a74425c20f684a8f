"""Importer for McGill-Billboard / SALAMI segment lists.

Source shape:

    {
      "title": "...", "artist": "...", "bpm": 96, "source": "...",
      "sections": [
        {"sectionType": "Verse", "start_ms": 0, "duration_ms": 8000,
         "chords": ["C:maj", "G:maj"], "tags": ["timing_confidence:high"]},
        ...
      ]
    }

Chords are listed per section without timing, so they are spread evenly
over the section (equal-width slots) once overlapping sections have been
clipped or skipped. This is a simplification, not an attempt to recover the
real chord timing. Sections may give "end_ms" instead of "duration_ms".
"""

from typing import Any, Dict, List, Mapping, Optional

from ..analysis import is_no_chord
from ..core import AnnotationBundle, BundleMetadata, ChordEvent, Key, Segment
from ..core.constants import (
    DEFAULT_SEGMENT_CONFIDENCE,
    DEFAULT_SOURCE,
    DISTRIBUTED_CHORD_CONFIDENCE,
    HIGH_SEGMENT_CONFIDENCE,
    PLACEHOLDER_TEMPO,
)
from ..core.errors import MalformedDataError
from .base import AnnotationImporter, finalize_chord_events, finalize_segments, to_float


HIGH_CONFIDENCE_TAG = "timing_confidence:high"


class SegmentListImporter(AnnotationImporter):
    """Import McGill-Billboard and SALAMI segment lists."""

    def __init__(
        self,
        trust_placeholder_tempo: bool = False,
        placeholder_tempo: float = PLACEHOLDER_TEMPO,
    ):
        """
        Initialize SegmentListImporter.

        Args:
            trust_placeholder_tempo: Keep a bpm equal to placeholder_tempo
                instead of treating it as "not annotated"
            placeholder_tempo: Tempo value the datasets write when none was annotated
        """
        self.trust_placeholder_tempo = trust_placeholder_tempo
        self.placeholder_tempo = placeholder_tempo

    def import_document(self, document: Mapping[str, Any]) -> AnnotationBundle:
        if not isinstance(document, Mapping):
            raise MalformedDataError("Segment list must be a JSON object")

        sections = document.get("sections")
        if not isinstance(sections, list):
            raise MalformedDataError("Segment list is missing its 'sections' array")
        if not sections:
            raise MalformedDataError("Segment list contains no sections")

        warnings: List[str] = []
        segments: List[Segment] = []
        chord_lists: Dict[int, Any] = {}

        for i, raw in enumerate(sections):
            if not isinstance(raw, Mapping):
                warnings.append(f"Skipped section {i}: not an object")
                continue

            start_ms = to_float(raw.get("start_ms"))
            duration_ms = self._duration_ms(raw, start_ms)
            label = raw.get("sectionType")
            if start_ms is None or duration_ms is None or not isinstance(label, str) or not label.strip():
                warnings.append(
                    f"Skipped section {i}: needs numeric start_ms, duration_ms (or end_ms) "
                    f"and a sectionType"
                )
                continue
            if duration_ms <= 0:
                warnings.append(f"Skipped section {i} ({label}): non-positive duration")
                continue

            tags = raw.get("tags") if isinstance(raw.get("tags"), list) else []
            confidence = (
                HIGH_SEGMENT_CONFIDENCE if HIGH_CONFIDENCE_TAG in tags else DEFAULT_SEGMENT_CONFIDENCE
            )
            segment = Segment(
                time=start_ms / 1000.0,
                duration=duration_ms / 1000.0,
                label=label.strip(),
                confidence=confidence,
            )
            segments.append(segment)
            chord_lists[id(segment)] = raw.get("chords")

        segments = finalize_segments(segments, warnings)
        if not segments:
            raise MalformedDataError("Segment list contains no usable sections")

        # Chords of skipped sections are dropped; clipped ones fill what is left
        events: List[ChordEvent] = []
        for segment in segments:
            events.extend(self._distribute_chords(
                chord_lists.get(id(segment)), segment.time, segment.duration
            ))

        source = document.get("source")
        if not isinstance(source, str) or not source:
            source = DEFAULT_SOURCE

        metadata = BundleMetadata(
            title=self._text(document.get("title")) or "Untitled",
            artist=self._text(document.get("artist")),
            album=self._text(document.get("album")),
            duration=max(s.end_time for s in segments),
            source=source,
        )

        tempo = self._read_tempo(document.get("bpm"), warnings)
        metadata.tempo = tempo

        key_hint = None
        if isinstance(document.get("key"), str):
            key_hint = Key.parse(document["key"])

        return AnnotationBundle(
            metadata=metadata,
            segments=segments,
            chord_events=finalize_chord_events(events),
            key_hint=key_hint,
            tempo_hint=tempo,
            warnings=warnings,
        )

    def _distribute_chords(self, chords: Any, start: float, duration: float) -> List[ChordEvent]:
        """Spread a section's chord list over equal-width slots."""
        if not isinstance(chords, list):
            return []

        valid = [c.strip() for c in chords if isinstance(c, str) and not is_no_chord(c)]
        if not valid:
            return []

        slot = duration / len(valid)
        return [
            ChordEvent(
                time=start + i * slot,
                duration=slot,
                symbol=symbol,
                confidence=DISTRIBUTED_CHORD_CONFIDENCE,
            )
            for i, symbol in enumerate(valid)
        ]

    @staticmethod
    def _duration_ms(raw: Mapping[str, Any], start_ms: Optional[float]) -> Optional[float]:
        """duration_ms, else end_ms - start_ms for sources that store absolute ends."""
        duration_ms = to_float(raw.get("duration_ms"))
        if duration_ms is None and start_ms is not None:
            end_ms = to_float(raw.get("end_ms"))
            if end_ms is not None:
                return end_ms - start_ms
        return duration_ms

    def _read_tempo(self, value: Any, warnings: List[str]) -> Optional[float]:
        bpm = to_float(value)
        if bpm is None or bpm <= 0:
            return None
        if bpm == self.placeholder_tempo and not self.trust_placeholder_tempo:
            warnings.append(
                f"Ignored bpm {bpm:g}: it is the dataset placeholder, not an annotated tempo"
            )
            return None
        return bpm

    @staticmethod
    def _text(value: Any) -> Optional[str]:
        return value.strip() if isinstance(value, str) and value.strip() else None
