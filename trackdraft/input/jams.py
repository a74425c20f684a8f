"""JAMS importer.

Reads the subset of JAMS (JSON Annotated Music Specification) that maps
onto a project:

- the first annotation whose namespace contains "segment"
- the first annotation whose namespace contains "chord"
- "key_mode" and "tempo" annotations, as hints
- file_metadata (title, artist, release, duration, identifiers.source)
- sandbox.trackdraft.sections[i].bars, an authored bar count per segment

Annotation data may be either a list of observations or the column layout
({"time": [...], "duration": [...], "value": [...]}); both are accepted.
Observations that give an absolute "end" instead of a "duration" are read
as end - time.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..analysis import is_no_chord
from ..core import AnnotationBundle, BundleMetadata, ChordEvent, Key, Segment
from ..core.constants import DEFAULT_SEGMENT_CONFIDENCE
from ..core.errors import MalformedDataError
from .base import (
    AnnotationImporter,
    finalize_chord_events,
    finalize_segments,
    to_confidence,
    to_float,
)


def iter_observations(annotation: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Return an annotation's observations as a list of dicts.

    Args:
        annotation: One entry of a JAMS "annotations" array

    Returns:
        Observations with time, duration, value and confidence keys
    """
    data = annotation.get("data")

    if isinstance(data, list):
        return [dict(obs) for obs in data if isinstance(obs, Mapping)]

    if isinstance(data, Mapping) and isinstance(data.get("time"), list):
        times = data["time"]
        columns = {
            name: data.get(name) if isinstance(data.get(name), list) else []
            for name in ("duration", "end", "value", "confidence")
        }
        observations = []
        for i, time in enumerate(times):
            observations.append({
                "time": time,
                **{
                    name: column[i] if i < len(column) else None
                    for name, column in columns.items()
                },
            })
        return observations

    return []


def find_annotation(
    annotations: List[Any],
    fragment: str,
    exact: bool = False,
) -> Optional[Mapping[str, Any]]:
    """First annotation whose namespace contains (or equals) the fragment."""
    for annotation in annotations:
        if not isinstance(annotation, Mapping):
            continue
        namespace = annotation.get("namespace")
        if not isinstance(namespace, str):
            continue
        if (namespace == fragment) if exact else (fragment in namespace):
            return annotation
    return None


class JamsImporter(AnnotationImporter):
    """Import JAMS documents."""

    def import_document(self, document: Mapping[str, Any]) -> AnnotationBundle:
        if not isinstance(document, Mapping):
            raise MalformedDataError("JAMS document must be a JSON object")

        file_metadata = document.get("file_metadata")
        annotations = document.get("annotations")
        if not isinstance(file_metadata, Mapping):
            raise MalformedDataError("JAMS document has no file_metadata object")
        if not isinstance(annotations, list):
            raise MalformedDataError("JAMS document has no annotations array")

        warnings: List[str] = []

        segment_annotation = find_annotation(annotations, "segment")
        chord_annotation = find_annotation(annotations, "chord")

        segments = []
        if segment_annotation is not None:
            segments = self._read_segments(
                segment_annotation, self._bar_hints(document), warnings
            )
        chord_events = []
        if chord_annotation is not None:
            chord_events = self._read_chords(chord_annotation)

        metadata = self._read_metadata(file_metadata, segment_annotation)

        if segment_annotation is None:
            warnings.append("No segment annotation found")
            if chord_events:
                # Chord-only files still get one section spanning the song
                end = metadata.duration or max(e.end_time for e in chord_events)
                if end > 0:
                    segments = [Segment(time=0.0, duration=end, label="verse")]
                    warnings.append("Created a single section covering the whole song")

        tempo_hint = self._read_tempo(annotations)
        metadata.tempo = tempo_hint

        return AnnotationBundle(
            metadata=metadata,
            segments=segments,
            chord_events=chord_events,
            key_hint=self._read_key(annotations),
            tempo_hint=tempo_hint,
            warnings=warnings,
        )

    def _read_segments(
        self,
        annotation: Mapping[str, Any],
        bar_hints: List[Optional[int]],
        warnings: List[str],
    ) -> List[Segment]:
        segments = []
        for i, obs in enumerate(iter_observations(annotation)):
            time = to_float(obs.get("time"))
            duration = to_float(obs.get("duration"))
            if duration is None and time is not None:
                end = to_float(obs.get("end"))
                if end is not None:
                    duration = end - time
            value = obs.get("value")
            if time is None or duration is None or value is None:
                warnings.append(
                    f"Skipped segment observation {i}: missing time, duration (or end) or value"
                )
                continue

            label = str(value).strip()
            if not label:
                warnings.append(f"Skipped segment observation {i}: empty label")
                continue

            segments.append(Segment(
                time=time,
                duration=duration,
                label=label,
                confidence=to_confidence(obs.get("confidence"), DEFAULT_SEGMENT_CONFIDENCE),
                bars_hint=bar_hints[i] if i < len(bar_hints) else None,
            ))

        return finalize_segments(segments, warnings)

    def _read_chords(self, annotation: Mapping[str, Any]) -> List[ChordEvent]:
        events = []
        for obs in iter_observations(annotation):
            time = to_float(obs.get("time"))
            value = obs.get("value")
            if time is None or not isinstance(value, str) or is_no_chord(value):
                continue
            duration = to_float(obs.get("duration"))
            if duration is None:
                end = to_float(obs.get("end"))
                duration = end - time if end is not None else 0.0
            confidence = obs.get("confidence")
            events.append(ChordEvent(
                time=time,
                duration=duration,
                symbol=value.strip(),
                confidence=None if to_float(confidence) is None else to_confidence(confidence, 0.0),
            ))
        return finalize_chord_events(events)

    @staticmethod
    def _bar_hints(document: Mapping[str, Any]) -> List[Optional[int]]:
        """Authored bar counts from sandbox.trackdraft.sections, by segment index."""
        sandbox = document.get("sandbox")
        if not isinstance(sandbox, Mapping):
            return []
        trackdraft = sandbox.get("trackdraft")
        if not isinstance(trackdraft, Mapping):
            return []
        sections = trackdraft.get("sections")
        if not isinstance(sections, list):
            return []

        hints = []
        for section in sections:
            bars = to_float(section.get("bars")) if isinstance(section, Mapping) else None
            if bars is None or bars <= 0:
                hints.append(None)
            else:
                hints.append(int(bars))
        return hints

    @staticmethod
    def _read_metadata(
        file_metadata: Mapping[str, Any],
        segment_annotation: Optional[Mapping[str, Any]],
    ) -> BundleMetadata:
        def text(value: Any) -> Optional[str]:
            return value.strip() if isinstance(value, str) and value.strip() else None

        source = None
        identifiers = file_metadata.get("identifiers")
        if isinstance(identifiers, Mapping):
            source = text(identifiers.get("source"))
        if source is None and segment_annotation is not None:
            annotation_metadata = segment_annotation.get("annotation_metadata")
            if isinstance(annotation_metadata, Mapping):
                source = text(annotation_metadata.get("corpus"))

        duration = to_float(file_metadata.get("duration"))
        return BundleMetadata(
            title=text(file_metadata.get("title")) or "Untitled",
            artist=text(file_metadata.get("artist")),
            album=text(file_metadata.get("release")),
            duration=duration if duration and duration > 0 else None,
            source=source or "JAMS",
        )

    @staticmethod
    def _read_key(annotations: List[Any]) -> Optional[Key]:
        annotation = find_annotation(annotations, "key_mode", exact=True)
        if annotation is None:
            return None
        for obs in iter_observations(annotation):
            value = obs.get("value")
            if isinstance(value, str):
                key = Key.parse(value)
                if key is not None:
                    return key
        return None

    @staticmethod
    def _read_tempo(annotations: List[Any]) -> Optional[float]:
        annotation = find_annotation(annotations, "tempo", exact=True)
        if annotation is None:
            return None
        for obs in iter_observations(annotation):
            bpm = to_float(obs.get("value"))
            if bpm is not None and bpm > 0:
                return bpm
        return None
