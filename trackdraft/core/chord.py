"""Chord model - root + quality, with chord tones from interval templates."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from .constants import PITCH_NAMES


class ChordQuality(Enum):
    """Closed set of chord qualities the project model understands."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    DIMINISHED7 = "diminished7"
    AUGMENTED = "augmented"
    SUS2 = "sus2"
    SUS4 = "sus4"
    DOMINANT7 = "dominant7"
    MINOR7 = "minor7"
    MAJOR7 = "major7"
    HALF_DIMINISHED = "half-diminished"

    @classmethod
    def from_value(cls, value: str) -> "ChordQuality":
        """Look up a quality by its value, falling back to major."""
        try:
            return cls(value)
        except ValueError:
            return cls.MAJOR


# Chord templates (intervals from root in semitones)
CHORD_TEMPLATES = {
    ChordQuality.MAJOR: [0, 4, 7],
    ChordQuality.MINOR: [0, 3, 7],
    ChordQuality.DIMINISHED: [0, 3, 6],
    ChordQuality.DIMINISHED7: [0, 3, 6, 9],
    ChordQuality.AUGMENTED: [0, 4, 8],
    ChordQuality.SUS2: [0, 2, 7],
    ChordQuality.SUS4: [0, 5, 7],
    ChordQuality.DOMINANT7: [0, 4, 7, 10],
    ChordQuality.MINOR7: [0, 3, 7, 10],
    ChordQuality.MAJOR7: [0, 4, 7, 11],
    ChordQuality.HALF_DIMINISHED: [0, 3, 6, 10],
}

# Qualities with a major or minor third, used for mode voting
MAJOR_FAMILY = {
    ChordQuality.MAJOR,
    ChordQuality.MAJOR7,
    ChordQuality.DOMINANT7,
    ChordQuality.AUGMENTED,
}
MINOR_FAMILY = {
    ChordQuality.MINOR,
    ChordQuality.MINOR7,
    ChordQuality.DIMINISHED,
    ChordQuality.DIMINISHED7,
    ChordQuality.HALF_DIMINISHED,
}

# Suffixes for display names (e.g. "Am7", "Bdim")
COMPACT_SUFFIX = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
    ChordQuality.DIMINISHED: "dim",
    ChordQuality.DIMINISHED7: "dim7",
    ChordQuality.AUGMENTED: "aug",
    ChordQuality.SUS2: "sus2",
    ChordQuality.SUS4: "sus4",
    ChordQuality.DOMINANT7: "7",
    ChordQuality.MINOR7: "m7",
    ChordQuality.MAJOR7: "maj7",
    ChordQuality.HALF_DIMINISHED: "m7b5",
}


def chord_tones(root: int, quality: ChordQuality) -> List[int]:
    """
    Generate the pitch classes of a chord.

    Args:
        root: Root pitch class (0-11)
        quality: Chord quality

    Returns:
        Pitch classes in template order, root first
    """
    template = CHORD_TEMPLATES.get(quality, CHORD_TEMPLATES[ChordQuality.MAJOR])
    return [(root + i) % 12 for i in template]


@dataclass(frozen=True)
class Chord:
    """A chord as root pitch class + quality."""

    root: int  # Pitch class 0-11
    quality: ChordQuality = ChordQuality.MAJOR

    def __post_init__(self):
        object.__setattr__(self, "root", self.root % 12)

    @property
    def root_name(self) -> str:
        return PITCH_NAMES[self.root]

    @property
    def notes(self) -> List[int]:
        """Pitch classes in the chord."""
        return chord_tones(self.root, self.quality)

    @property
    def note_names(self) -> List[str]:
        return [PITCH_NAMES[pc] for pc in self.notes]

    @property
    def name(self) -> str:
        """Get display name (e.g., 'C', 'Am7', 'F#dim')."""
        return f"{self.root_name}{COMPACT_SUFFIX[self.quality]}"

    @property
    def is_major_family(self) -> bool:
        return self.quality in MAJOR_FAMILY

    @property
    def is_minor_family(self) -> bool:
        return self.quality in MINOR_FAMILY
