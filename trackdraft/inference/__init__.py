"""Inference layer - Musical understanding derived from annotations.

This layer adds what annotation files usually leave out:
- Key detection from chord-root histograms
- Harmonic function and Roman numerals relative to the key
- Section type mapping and bar estimates
- Progression summarizing across sections

Pipeline: Sections + Chords → [Key, Function, Numerals] → Progressions
"""

from .key import ChordKeyDetector, detect_key
from .harmony import (
    FUNCTION_TABLE,
    ROMAN_NUMERALS,
    classify_function,
    roman_numeral,
    annotate_chord,
    annotate_chords,
)
from .structure import map_section_type, normalize_label, estimate_bars, section_name
from .progressions import ProgressionDetector, summarize_progressions, COMMON_PROGRESSIONS

__all__ = [
    # Key detection
    "ChordKeyDetector",
    "detect_key",
    # Harmony
    "FUNCTION_TABLE",
    "ROMAN_NUMERALS",
    "classify_function",
    "roman_numeral",
    "annotate_chord",
    "annotate_chords",
    # Structure
    "map_section_type",
    "normalize_label",
    "estimate_bars",
    "section_name",
    # Progressions
    "ProgressionDetector",
    "summarize_progressions",
    "COMMON_PROGRESSIONS",
]
