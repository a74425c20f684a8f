"""Key detection - Estimate the tonal center from chord annotations.

Annotation files list chords, not notes, so the key is estimated from a
histogram of chord roots:
- Tonic: the most frequent chord root (ties go to the lowest pitch class)
- Mode: majority vote between major- and minor-family chords (ties: major)

This is deliberately simpler than profile correlation; it only has to give
Roman numerals a reference point when the source names no key.
"""

import numpy as np
from typing import Iterable, List, Optional, Union

from ..analysis import parse_chord_symbol
from ..core import Chord, ChordEvent, Key, Mode, ProjectChord
from ..core.chord import MAJOR_FAMILY, MINOR_FAMILY


ChordLike = Union[Chord, ChordEvent, ProjectChord]


class ChordKeyDetector:
    """Detect a key from a collection of chords."""

    def detect(self, chords: Iterable[ChordLike]) -> Optional[Key]:
        """
        Detect the key of a chord collection.

        Args:
            chords: Chord events (symbols are parsed), chords or project chords

        Returns:
            Detected Key, or None when there are no chords
        """
        parsed = self._to_chords(chords)
        if not parsed:
            return None

        histogram = self.root_histogram(parsed)
        # argmax returns the first maximum, i.e. the lowest pitch class on ties
        tonic = int(np.argmax(histogram))

        major_votes = sum(1 for c in parsed if c.quality in MAJOR_FAMILY)
        minor_votes = sum(1 for c in parsed if c.quality in MINOR_FAMILY)
        mode = Mode.MAJOR if major_votes >= minor_votes else Mode.MINOR

        return Key(tonic, mode)

    def root_histogram(self, chords: List[Chord]) -> np.ndarray:
        """Count chord roots per pitch class (12-element array)."""
        roots = np.array([c.root for c in chords], dtype=int)
        return np.bincount(roots, minlength=12)

    def _to_chords(self, chords: Iterable[ChordLike]) -> List[Chord]:
        result = []
        for item in chords:
            if isinstance(item, ChordEvent):
                result.append(parse_chord_symbol(item.symbol))
            elif isinstance(item, ProjectChord):
                result.append(item.chord)
            else:
                result.append(item)
        return result


def detect_key(chords: Iterable[ChordLike]) -> Optional[Key]:
    """Detect a key with the default detector."""
    return ChordKeyDetector().detect(chords)
