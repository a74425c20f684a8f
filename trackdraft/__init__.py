"""TrackDraft - Music annotation import and song-structure toolkit.

Architecture Layers:
    1. core/       - Chord, key, bundle and project models
    2. analysis/   - Chord symbol notation (Harte parsing and formatting)
    3. input/      - Annotation loading, format detection and importers
    4. inference/  - Musical understanding (key, harmony, structure, progressions)
    5. processing/ - Bundle to project conversion (alignment, bars)
    6. lyrics/     - Syllable and rhyme helpers
    7. output/     - Export (project JSON, JAMS, text charts, MIDI)
"""

__version__ = "0.1.0"

# Core types
from .core import (
    Chord,
    ChordQuality,
    Key,
    Mode,
    AnnotationBundle,
    Project,
    ProjectSection,
    ProjectChord,
    Progression,
    SectionType,
    HarmonicFunction,
    AnnotationImportError,
    UnknownFormatError,
    UnsupportedFormatError,
    MalformedDataError,
    InferenceWarning,
)

# Analysis layer
from .analysis import parse_chord_symbol, format_chord_symbol

# Input layer
from .input import FormatTag, classify, load_annotation_file

# Inference layer
from .inference import ChordKeyDetector, ProgressionDetector

# Processing layer
from .processing import ProjectConverter, ConverterConfig, AlignmentPolicy

# Lyrics
from .lyrics import count_syllables, detect_rhyme_type, analyze_rhyme_scheme

# Output layer
from .output import export_project_json, load_project_json, project_to_jams, MIDIExporter

# Pipeline
from .pipeline import detect_format, import_bundle, import_and_convert, import_file

__all__ = [
    # Core
    "Chord",
    "ChordQuality",
    "Key",
    "Mode",
    "AnnotationBundle",
    "Project",
    "ProjectSection",
    "ProjectChord",
    "Progression",
    "SectionType",
    "HarmonicFunction",
    "AnnotationImportError",
    "UnknownFormatError",
    "UnsupportedFormatError",
    "MalformedDataError",
    "InferenceWarning",
    # Analysis
    "parse_chord_symbol",
    "format_chord_symbol",
    # Input
    "FormatTag",
    "classify",
    "load_annotation_file",
    # Inference
    "ChordKeyDetector",
    "ProgressionDetector",
    # Processing
    "ProjectConverter",
    "ConverterConfig",
    "AlignmentPolicy",
    # Lyrics
    "count_syllables",
    "detect_rhyme_type",
    "analyze_rhyme_scheme",
    # Output
    "export_project_json",
    "load_project_json",
    "project_to_jams",
    "MIDIExporter",
    # Pipeline
    "detect_format",
    "import_bundle",
    "import_and_convert",
    "import_file",
]
