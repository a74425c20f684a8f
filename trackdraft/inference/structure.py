"""Song structure helpers - Section labels and bar estimates.

Source datasets label sections freely ("Verse 1", "pre-chorus", "Coda",
"A"); the project model only knows six section types. Labels are mapped
through an alias table and a prefix match, with anything unrecognized
treated as a bridge.
"""

import math
import re
from typing import Optional

from ..core import SectionType
from ..core.constants import BEATS_PER_BAR
from ..core.errors import MalformedDataError


# Dataset vocabulary that doesn't start with a canonical type name
SECTION_ALIASES = {
    "prechorus": SectionType.TRANSITION,
    "pre": SectionType.TRANSITION,
    "interlude": SectionType.TRANSITION,
    "transition": SectionType.TRANSITION,
    "break": SectionType.TRANSITION,
    "silence": SectionType.TRANSITION,
    "refrain": SectionType.CHORUS,
    "hook": SectionType.CHORUS,
    "postchorus": SectionType.CHORUS,
    "coda": SectionType.OUTRO,
    "fadeout": SectionType.OUTRO,
    "fade": SectionType.OUTRO,
    "ending": SectionType.OUTRO,
    "end": SectionType.OUTRO,
    "instrumental": SectionType.BRIDGE,
    "solo": SectionType.BRIDGE,
    "middle": SectionType.BRIDGE,
    "introduction": SectionType.INTRO,
    "head": SectionType.INTRO,
}

# Shortest label accepted for a prefix match ("chor" -> chorus, but not "a")
MIN_PREFIX_LENGTH = 3

_WORD_SPLIT = re.compile(r"[\s_0-9]+")


def normalize_label(label: str) -> str:
    """
    Reduce a section label to a single lowercase word.

    "Verse 1" -> "verse", "pre-chorus" -> "prechorus", "chorus_a" -> "chorus".
    """
    if not isinstance(label, str):
        return ""
    words = [w for w in _WORD_SPLIT.split(label.strip().lower()) if w]
    if not words:
        return ""
    return words[0].replace("-", "")


def map_section_type(label: str) -> SectionType:
    """
    Map a free-form section label to a section type.

    Args:
        label: Label as written in the source file

    Returns:
        The matching SectionType; unrecognized labels map to BRIDGE
    """
    token = normalize_label(label)
    if not token:
        return SectionType.BRIDGE

    if token in SECTION_ALIASES:
        return SECTION_ALIASES[token]

    for section_type in SectionType:
        name = section_type.value
        if token.startswith(name):
            return section_type
        if len(token) >= MIN_PREFIX_LENGTH and name.startswith(token):
            return section_type

    return SectionType.BRIDGE


def estimate_bars(duration: float, bpm: float, beats_per_bar: int = BEATS_PER_BAR) -> int:
    """
    Estimate how many bars a section spans.

    Args:
        duration: Section duration in seconds
        bpm: Tempo in beats per minute
        beats_per_bar: Beats per bar (4 for 4/4)

    Returns:
        Bar count rounded half up, at least 1

    Raises:
        MalformedDataError: If the estimate is not a finite number
    """
    if duration <= 0 or bpm <= 0 or beats_per_bar <= 0:
        return 1
    bars = duration * bpm / 60.0 / beats_per_bar
    if not math.isfinite(bars):
        raise MalformedDataError(
            f"Section of {duration:g}s at {bpm:g} BPM is too long to count in bars"
        )
    return max(1, int(math.floor(bars + 0.5)))


def section_name(label: str, fallback: Optional[SectionType] = None) -> str:
    """Display name for a section: the source label title-cased, else the type name."""
    words = label.replace("_", " ").split() if isinstance(label, str) else []
    if words:
        return " ".join(w[0].upper() + w[1:] for w in words)
    if fallback is not None:
        return fallback.value.capitalize()
    return ""
