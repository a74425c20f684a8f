"""Format detection - classify a parsed JSON document by its shape.

Detection is purely structural and order-sensitive: the predicates below are
tried in order and the first match wins. Several formats share optional
fields, so reordering them changes results.

1. JAMS:             file_metadata + annotations
2. JCRD (Isophonics): chord_progression + sections[0].start_time
3. McGill / SALAMI:  sections[0].start_ms + sections[0].sectionType
                     (SALAMI when the source or the first section's tags say so)
4. unknown
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union


class FormatTag(Enum):
    """Annotation formats the detector can recognize."""
    JAMS = "jams"
    JCRD = "jcrd"
    MCGILL_BILLBOARD = "mcgill-billboard"
    SALAMI = "salami"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class JamsDocument:
    document: Mapping[str, Any]

    @property
    def tag(self) -> FormatTag:
        return FormatTag.JAMS


@dataclass(frozen=True)
class JcrdDocument:
    document: Mapping[str, Any]

    @property
    def tag(self) -> FormatTag:
        return FormatTag.JCRD


@dataclass(frozen=True)
class SegmentListDocument:
    """McGill-Billboard or SALAMI segment list."""

    document: Mapping[str, Any]
    salami: bool = False

    @property
    def tag(self) -> FormatTag:
        return FormatTag.SALAMI if self.salami else FormatTag.MCGILL_BILLBOARD


@dataclass(frozen=True)
class UnrecognizedDocument:
    reason: str = "no known annotation schema matched"

    @property
    def tag(self) -> FormatTag:
        return FormatTag.UNKNOWN


DetectedDocument = Union[JamsDocument, JcrdDocument, SegmentListDocument, UnrecognizedDocument]


def _first_section(value: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    sections = value.get("sections")
    if not isinstance(sections, list) or not sections:
        return None
    first = sections[0]
    return first if isinstance(first, Mapping) else None


def _is_salami(value: Mapping[str, Any], first: Mapping[str, Any]) -> bool:
    source = value.get("source")
    if isinstance(source, str) and "SALAMI" in source:
        return True
    tags = first.get("tags")
    return isinstance(tags, list) and "salami_annotated" in tags


def classify(value: Any) -> DetectedDocument:
    """
    Classify a parsed JSON value.

    Never raises; anything that is not a recognizable mapping comes back as
    UnrecognizedDocument.

    Args:
        value: Any value produced by json.load

    Returns:
        Tagged document wrapper; inspect .tag or match on the type
    """
    if not isinstance(value, Mapping):
        return UnrecognizedDocument(f"expected a JSON object, got {type(value).__name__}")

    if "file_metadata" in value and "annotations" in value:
        return JamsDocument(value)

    first = _first_section(value)

    if "chord_progression" in value and first is not None and "start_time" in first:
        return JcrdDocument(value)

    if first is not None and "start_ms" in first and "sectionType" in first:
        return SegmentListDocument(value, salami=_is_salami(value, first))

    return UnrecognizedDocument()


def detect_format(value: Any) -> FormatTag:
    """Detect the annotation format of a parsed JSON value."""
    return classify(value).tag
