"""Core types and constants for TrackDraft."""

from .constants import (
    PITCH_NAMES,
    FLAT_PITCH_NAMES,
    DEFAULT_TEMPO,
    DEFAULT_TIME_SIGNATURE,
    BEATS_PER_BAR,
    PLACEHOLDER_TEMPO,
)
from .notes import note_index, note_name, interval, transpose
from .chord import Chord, ChordQuality, CHORD_TEMPLATES, chord_tones
from .key import Key, Mode, DEFAULT_KEY
from .bundle import AnnotationBundle, BundleMetadata, Segment, ChordEvent
from .project import (
    Project,
    ProjectMetadata,
    ProjectSection,
    ProjectChord,
    Progression,
    SectionType,
    HarmonicFunction,
)
from .errors import (
    AnnotationImportError,
    UnknownFormatError,
    UnsupportedFormatError,
    MalformedDataError,
    InferenceWarning,
)

__all__ = [
    # Constants
    "PITCH_NAMES",
    "FLAT_PITCH_NAMES",
    "DEFAULT_TEMPO",
    "DEFAULT_TIME_SIGNATURE",
    "BEATS_PER_BAR",
    "PLACEHOLDER_TEMPO",
    # Notes
    "note_index",
    "note_name",
    "interval",
    "transpose",
    # Chords and keys
    "Chord",
    "ChordQuality",
    "CHORD_TEMPLATES",
    "chord_tones",
    "Key",
    "Mode",
    "DEFAULT_KEY",
    # Annotation bundle
    "AnnotationBundle",
    "BundleMetadata",
    "Segment",
    "ChordEvent",
    # Project
    "Project",
    "ProjectMetadata",
    "ProjectSection",
    "ProjectChord",
    "Progression",
    "SectionType",
    "HarmonicFunction",
    # Errors
    "AnnotationImportError",
    "UnknownFormatError",
    "UnsupportedFormatError",
    "MalformedDataError",
    "InferenceWarning",
]
