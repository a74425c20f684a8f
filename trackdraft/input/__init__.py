"""Input layer - Annotation loading, format detection and import.

Files are loaded as JSON, classified by shape, then handed to the
importer for their format, which produces an AnnotationBundle.
"""

from .loader import AnnotationLoader, load_annotation_file
from .detector import (
    FormatTag,
    DetectedDocument,
    JamsDocument,
    JcrdDocument,
    SegmentListDocument,
    UnrecognizedDocument,
    classify,
    detect_format,
)
from .base import AnnotationImporter
from .jams import JamsImporter
from .jcrd import JcrdImporter
from .segment_list import SegmentListImporter
from ..core.errors import UnknownFormatError


def importer_for(
    detected: DetectedDocument,
    trust_placeholder_tempo: bool = False,
) -> AnnotationImporter:
    """
    Pick the importer for a classified document.

    Args:
        detected: Result of classify()
        trust_placeholder_tempo: Passed to segment-list importers

    Returns:
        An importer instance for the document's format

    Raises:
        UnknownFormatError: If the document was not recognized
    """
    if isinstance(detected, JamsDocument):
        return JamsImporter()
    if isinstance(detected, JcrdDocument):
        return JcrdImporter()
    if isinstance(detected, SegmentListDocument):
        return SegmentListImporter(trust_placeholder_tempo=trust_placeholder_tempo)
    raise UnknownFormatError()


__all__ = [
    # Loading
    "AnnotationLoader",
    "load_annotation_file",
    # Detection
    "FormatTag",
    "DetectedDocument",
    "JamsDocument",
    "JcrdDocument",
    "SegmentListDocument",
    "UnrecognizedDocument",
    "classify",
    "detect_format",
    # Importers
    "AnnotationImporter",
    "JamsImporter",
    "JcrdImporter",
    "SegmentListImporter",
    "importer_for",
]
