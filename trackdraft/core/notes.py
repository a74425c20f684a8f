"""Note-name and interval utilities."""

from typing import Optional

from .constants import PITCH_NAMES, FLAT_PITCH_NAMES


# Every spelling we accept, mapped to its pitch class
NOTE_INDEX = {
    "C": 0, "B#": 0,
    "C#": 1, "Db": 1,
    "D": 2,
    "D#": 3, "Eb": 3,
    "E": 4, "Fb": 4,
    "F": 5, "E#": 5,
    "F#": 6, "Gb": 6,
    "G": 7,
    "G#": 8, "Ab": 8,
    "A": 9,
    "A#": 10, "Bb": 10,
    "B": 11, "Cb": 11,
}


def note_index(name: str) -> Optional[int]:
    """
    Get the pitch class (0-11) of a note name.

    Accepts sharp and flat spellings ("C#" and "Db" are both 1), an
    optional lowercase letter, and "♯"/"♭" glyphs.

    Returns:
        Pitch class, or None if the name is not a note
    """
    if not name:
        return None
    cleaned = name.strip().replace("♯", "#").replace("♭", "b")
    if not cleaned:
        return None
    cleaned = cleaned[0].upper() + cleaned[1:]
    return NOTE_INDEX.get(cleaned)


def note_name(pitch_class: int, prefer_flats: bool = False) -> str:
    """Get the canonical name of a pitch class (sharp spelling by default)."""
    names = FLAT_PITCH_NAMES if prefer_flats else PITCH_NAMES
    return names[pitch_class % 12]


def interval(from_pc: int, to_pc: int) -> int:
    """Ascending semitone distance from one pitch class to another (0-11)."""
    return (to_pc - from_pc) % 12


def transpose(pitch_class: int, semitones: int) -> int:
    """Transpose a pitch class by a number of semitones."""
    return (pitch_class + semitones) % 12
