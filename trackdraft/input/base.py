"""Base class and shared helpers for format-specific importers."""

import math
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from ..core import AnnotationBundle, ChordEvent, Segment


class AnnotationImporter(ABC):
    """Abstract base class for annotation importers."""

    @abstractmethod
    def import_document(self, document: Mapping[str, Any]) -> AnnotationBundle:
        """
        Translate a parsed source document into an annotation bundle.

        Args:
            document: Parsed JSON in this importer's source format

        Returns:
            AnnotationBundle with segments, chord events and hints

        Raises:
            AnnotationImportError: If the document cannot be imported
        """
        pass


def to_float(value: Any) -> Optional[float]:
    """Read a finite number; bools, strings that aren't numbers, NaN and inf give None."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_confidence(value: Any, default: float) -> float:
    """Read a confidence value clamped to 0-1."""
    number = to_float(value)
    if number is None:
        return default
    return max(0.0, min(1.0, number))


def finalize_segments(segments: List[Segment], warnings: List[str]) -> List[Segment]:
    """
    Sort segments and make them non-overlapping.

    A segment that starts before the previous one ends (or before 0) is
    clipped to start there; if nothing is left it is skipped.

    Args:
        segments: Raw segments in source order
        warnings: List that receives a note for every clipped/skipped entry

    Returns:
        Sorted, non-overlapping segments with positive durations
    """
    result = []
    prev_end = 0.0

    for segment in sorted(segments, key=lambda s: s.time):
        if segment.time < prev_end:
            end = segment.end_time
            if end <= prev_end:
                warnings.append(
                    f"Skipped segment '{segment.label}' at {segment.time:.2f}s: "
                    f"fully overlaps the previous segment"
                )
                continue
            warnings.append(
                f"Clipped segment '{segment.label}' to start at {prev_end:.2f}s "
                f"(was {segment.time:.2f}s)"
            )
            segment.duration = end - prev_end
            segment.time = prev_end

        if segment.duration <= 0:
            warnings.append(
                f"Skipped segment '{segment.label}' at {segment.time:.2f}s: zero duration"
            )
            continue

        result.append(segment)
        prev_end = segment.end_time

    return result


def finalize_chord_events(events: List[ChordEvent]) -> List[ChordEvent]:
    """Sort chord events by time, dropping any with a negative duration."""
    return sorted((e for e in events if e.duration >= 0), key=lambda e: e.time)
