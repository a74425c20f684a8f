"""Lyrics helpers - Syllables, rhythm and rhyme.

Pure text heuristics used while writing lyrics against a song structure:
- Syllable counting and splitting
- Line rhythm comparison
- Rhyme classification and rhyme-scheme inference
"""

from .syllables import (
    count_syllables,
    break_into_syllables,
    analyze_line,
    compare_rhythm,
    rhythm_match_quality,
    WordAnalysis,
    LineAnalysis,
)
from .rhyme import (
    RhymeType,
    RhymeMatch,
    RhymeWord,
    RhymeGroup,
    RhymeScheme,
    detect_rhyme_type,
    rhyme_part,
    analyze_rhyme_scheme,
)

__all__ = [
    # Syllables
    "count_syllables",
    "break_into_syllables",
    "analyze_line",
    "compare_rhythm",
    "rhythm_match_quality",
    "WordAnalysis",
    "LineAnalysis",
    # Rhyme
    "RhymeType",
    "RhymeMatch",
    "RhymeWord",
    "RhymeGroup",
    "RhymeScheme",
    "detect_rhyme_type",
    "rhyme_part",
    "analyze_rhyme_scheme",
]
