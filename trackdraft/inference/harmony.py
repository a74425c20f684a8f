"""Harmonic function and Roman numerals relative to a key.

Both lookups are indexed by the interval (0-11 semitones) from the key's
tonic to the chord root. The tables are plain data; access always goes
through a function with an explicit default, so every interval and quality
maps to a value.
"""

from typing import Iterable, Optional

from ..core import ChordQuality, HarmonicFunction, Key, ProjectChord, interval


# Interval from tonic -> function
FUNCTION_TABLE = {
    0: HarmonicFunction.TONIC,
    4: HarmonicFunction.TONIC,
    9: HarmonicFunction.TONIC,
    1: HarmonicFunction.SUBDOMINANT,
    2: HarmonicFunction.SUBDOMINANT,
    5: HarmonicFunction.SUBDOMINANT,
    7: HarmonicFunction.DOMINANT,
    10: HarmonicFunction.DOMINANT,
    11: HarmonicFunction.DOMINANT,
}

# Positional; chord quality is not taken into account ("i" renders as "I")
ROMAN_NUMERALS = [
    "I", "bII", "II", "bIII", "III", "IV",
    "bV", "V", "bVI", "VI", "bVII", "VII",
]


def classify_function(semitones: int, quality: Optional[ChordQuality] = None) -> HarmonicFunction:
    """
    Classify the harmonic function of a chord.

    Args:
        semitones: Interval from the key's tonic to the chord root
        quality: Chord quality, used for intervals outside the table

    Returns:
        Tonic, subdominant or dominant. Intervals 3, 6 and 8 are dominant
        for dominant-seventh chords and tonic otherwise.
    """
    function = FUNCTION_TABLE.get(semitones % 12)
    if function is not None:
        return function
    if quality == ChordQuality.DOMINANT7:
        return HarmonicFunction.DOMINANT
    return HarmonicFunction.TONIC


def roman_numeral(semitones: int) -> str:
    """Roman numeral for a chord root at the given interval from the tonic."""
    return ROMAN_NUMERALS[semitones % 12]


def annotate_chord(chord: ProjectChord, key: Key) -> ProjectChord:
    """Set a chord's Roman numeral and function for the given key."""
    semitones = interval(key.root, chord.root)
    chord.roman_numeral = roman_numeral(semitones)
    chord.function = classify_function(semitones, chord.quality)
    return chord


def annotate_chords(chords: Iterable[ProjectChord], key: Key) -> None:
    """Re-derive Roman numerals and functions for chords in place."""
    for chord in chords:
        annotate_chord(chord, key)
