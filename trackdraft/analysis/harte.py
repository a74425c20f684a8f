"""Chord symbol parsing and formatting.

Reads Harte notation ("C:min7", "Bb:hdim7/b3") as used by the MIR datasets,
plus the compact lead-sheet spellings ("Am7", "F#m7b5", "G7") that show up
in hand-made files, and turns them into a Chord.

The formatter writes canonical Harte symbols with sharp spellings. The round
trip is lossy by design of the closed quality set:
- enharmonic spelling is not kept ("Db:maj" comes back as "C#:maj")
- bass notes / inversions are dropped ("C:maj/3" -> "C:maj")
- extensions collapse onto the nearest seventh chord (9, 11, 13 -> 7;
  maj9 -> maj7; min9 -> min7)
- sixth chords become plain triads and minor-major sevenths become minor
A second pass is stable: format(parse(format(parse(s)))) == format(parse(s)).
"""

import re
from typing import List, Optional, Tuple

from ..core.chord import Chord, ChordQuality, COMPACT_SUFFIX
from ..core.constants import NO_CHORD_SYMBOLS, PITCH_NAMES


LETTER_PITCH_CLASSES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_ROOT_PATTERN = re.compile(r"^\s*([A-Ga-g])([#b♯♭]*)")

# Quality tokens, most specific first. Matching is by prefix, case-sensitive
# first (so "M7" and "m7" differ), then once more on the lowercased token.
QUALITY_PREFIXES: List[Tuple[str, ChordQuality]] = [
    # Harte shorthands
    ("hdim7", ChordQuality.HALF_DIMINISHED),
    ("hdim", ChordQuality.HALF_DIMINISHED),
    ("minmaj7", ChordQuality.MINOR),
    ("min7", ChordQuality.MINOR7),
    ("min9", ChordQuality.MINOR7),
    ("min11", ChordQuality.MINOR7),
    ("min13", ChordQuality.MINOR7),
    ("min", ChordQuality.MINOR),
    ("maj7", ChordQuality.MAJOR7),
    ("maj9", ChordQuality.MAJOR7),
    ("maj11", ChordQuality.MAJOR7),
    ("maj13", ChordQuality.MAJOR7),
    ("maj", ChordQuality.MAJOR),
    ("dim7", ChordQuality.DIMINISHED7),
    ("dim", ChordQuality.DIMINISHED),
    ("aug", ChordQuality.AUGMENTED),
    ("sus2", ChordQuality.SUS2),
    ("sus4", ChordQuality.SUS4),
    ("sus", ChordQuality.SUS4),
    ("13", ChordQuality.DOMINANT7),
    ("11", ChordQuality.DOMINANT7),
    ("9", ChordQuality.DOMINANT7),
    ("7", ChordQuality.DOMINANT7),
    # Lead-sheet spellings
    ("m7b5", ChordQuality.HALF_DIMINISHED),
    ("m7-5", ChordQuality.HALF_DIMINISHED),
    ("ø", ChordQuality.HALF_DIMINISHED),
    ("°7", ChordQuality.DIMINISHED7),
    ("o7", ChordQuality.DIMINISHED7),
    ("°", ChordQuality.DIMINISHED),
    ("o", ChordQuality.DIMINISHED),
    ("+", ChordQuality.AUGMENTED),
    ("mMaj7", ChordQuality.MINOR),
    ("M7", ChordQuality.MAJOR7),
    ("M9", ChordQuality.MAJOR7),
    ("Δ", ChordQuality.MAJOR7),
    ("m7", ChordQuality.MINOR7),
    ("m9", ChordQuality.MINOR7),
    ("m11", ChordQuality.MINOR7),
    ("m13", ChordQuality.MINOR7),
    ("-7", ChordQuality.MINOR7),
    ("m", ChordQuality.MINOR),
    ("-", ChordQuality.MINOR),
]

HARTE_SUFFIX = {
    ChordQuality.MAJOR: "maj",
    ChordQuality.MINOR: "min",
    ChordQuality.DIMINISHED: "dim",
    ChordQuality.DIMINISHED7: "dim7",
    ChordQuality.AUGMENTED: "aug",
    ChordQuality.SUS2: "sus2",
    ChordQuality.SUS4: "sus4",
    ChordQuality.DOMINANT7: "7",
    ChordQuality.MINOR7: "min7",
    ChordQuality.MAJOR7: "maj7",
    ChordQuality.HALF_DIMINISHED: "hdim7",
}


def is_no_chord(symbol) -> bool:
    """True for the "no chord" / "unknown" sentinels ("N", "X") and blanks."""
    if not isinstance(symbol, str):
        return True
    return symbol.strip().upper() in NO_CHORD_SYMBOLS


def parse_root(text: str) -> Tuple[Optional[int], str]:
    """
    Read a root note from the start of a string.

    Returns:
        Tuple of (pitch class or None, remaining text)
    """
    match = _ROOT_PATTERN.match(text)
    if not match:
        return None, text.strip()

    letter, accidentals = match.groups()
    pc = LETTER_PITCH_CLASSES[letter.upper()]
    pc += accidentals.count("#") + accidentals.count("♯")
    pc -= accidentals.count("b") + accidentals.count("♭")
    return pc % 12, text[match.end():]


def parse_quality(token: str) -> ChordQuality:
    """Map a quality token to the closed quality set (default: major)."""
    token = token.strip()
    # Drop the bass note: "maj/3" -> "maj"
    token = token.split("/", 1)[0]
    if not token:
        return ChordQuality.MAJOR

    for prefix, quality in QUALITY_PREFIXES:
        if token.startswith(prefix):
            return quality
    # Lead-sheet major marker: "CM", "CM6"; "Maj7" and "Min7" go to the lowercase pass
    if token.startswith("M") and not token[1:2].isalpha():
        return ChordQuality.MAJOR
    lowered = token.lower()
    for prefix, quality in QUALITY_PREFIXES:
        if lowered.startswith(prefix):
            return quality
    return ChordQuality.MAJOR


def parse_chord_symbol(symbol: str) -> Chord:
    """
    Parse a chord symbol into a Chord.

    Never raises for non-blank input: an unreadable root becomes C and an
    unknown quality becomes major.

    Args:
        symbol: Chord symbol, e.g. "C:min7", "Db:maj/5", "Am7"

    Returns:
        Parsed Chord

    Raises:
        ValueError: If the symbol is empty or blank
    """
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValueError("Cannot parse an empty chord symbol")

    text = symbol.strip()
    if ":" in text:
        root_str, _, quality_str = text.partition(":")
        root, leftover = parse_root(root_str)
        if leftover.strip():
            # Something after the root before the colon, e.g. "Cm:7"
            quality_str = leftover + quality_str
        quality = parse_quality(quality_str or "maj")
    else:
        root, rest = parse_root(text)
        quality = parse_quality(rest)

    return Chord(root if root is not None else 0, quality)


def format_chord_symbol(chord: Chord) -> str:
    """Format a Chord as a canonical Harte symbol, e.g. 'C#:min7'."""
    return f"{PITCH_NAMES[chord.root]}:{HARTE_SUFFIX[chord.quality]}"


def format_chord_name(chord: Chord) -> str:
    """Format a Chord as a compact display name, e.g. 'C#m7'."""
    return f"{PITCH_NAMES[chord.root]}{COMPACT_SUFFIX[chord.quality]}"


def normalize_chord_symbol(symbol: str) -> str:
    """Parse then format; the canonical spelling of any chord symbol."""
    return format_chord_symbol(parse_chord_symbol(symbol))
