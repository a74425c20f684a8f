"""Key model - tonic pitch class + major/minor mode."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .constants import PITCH_NAMES
from .notes import note_index


class Mode(Enum):
    """Key modes supported by the project model."""
    MAJOR = "major"
    MINOR = "minor"


SCALE_INTERVALS = {
    Mode.MAJOR: [0, 2, 4, 5, 7, 9, 11],
    Mode.MINOR: [0, 2, 3, 5, 7, 8, 10],  # Natural minor
}


@dataclass(frozen=True)
class Key:
    """A musical key."""

    root: int  # Pitch class 0-11
    mode: Mode = Mode.MAJOR

    def __post_init__(self):
        object.__setattr__(self, "root", self.root % 12)

    @property
    def root_name(self) -> str:
        return PITCH_NAMES[self.root]

    @property
    def name(self) -> str:
        """Display name, e.g. 'C Major', 'F# Minor'."""
        return f"{self.root_name} {self.mode.value.capitalize()}"

    @property
    def harte(self) -> str:
        """JAMS key_mode value, e.g. 'C:major'."""
        return f"{self.root_name}:{self.mode.value}"

    @property
    def scale_pitch_classes(self) -> List[int]:
        return [(self.root + i) % 12 for i in SCALE_INTERVALS[self.mode]]

    @property
    def relative(self) -> "Key":
        """Relative major/minor (minor is 3 semitones below its major)."""
        if self.mode == Mode.MAJOR:
            return Key((self.root - 3) % 12, Mode.MINOR)
        return Key((self.root + 3) % 12, Mode.MAJOR)

    @property
    def parallel(self) -> "Key":
        other = Mode.MINOR if self.mode == Mode.MAJOR else Mode.MAJOR
        return Key(self.root, other)

    @classmethod
    def parse(cls, text: str) -> Optional["Key"]:
        """
        Parse a key string.

        Accepts "C:major", "A:minor", "C Major", "F# minor", "Am", "Eb".
        A missing mode means major.

        Returns:
            Key, or None if no tonic could be read
        """
        if not isinstance(text, str):
            return None
        cleaned = text.strip()
        if not cleaned:
            return None

        if ":" in cleaned:
            root_str, _, mode_str = cleaned.partition(":")
        elif " " in cleaned:
            root_str, _, mode_str = cleaned.partition(" ")
        else:
            root_str, mode_str = cleaned, ""
            # Compact minor spelling: "Am", "C#m", "Ebmin"
            for suffix in ("min", "m"):
                if len(cleaned) > len(suffix) and cleaned.endswith(suffix):
                    root_str, mode_str = cleaned[: -len(suffix)], "minor"
                    break

        root = note_index(root_str.strip())
        if root is None:
            return None

        mode = Mode.MINOR if mode_str.strip().lower().startswith("min") else Mode.MAJOR
        return cls(root, mode)


DEFAULT_KEY = Key(0, Mode.MAJOR)
