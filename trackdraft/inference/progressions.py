"""Progression summarizer - Collect the distinct chord sequences of a song.

Each section's chords are normalized to (degree, quality) pairs relative to
the key, so the same progression is recognized in any section regardless of
chord timing. Identical signatures are grouped into one Progression with a
usage count; sections keep their own chords and only gain a reference.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..core import ChordQuality, Key, Progression, ProjectChord, ProjectSection
from ..core import interval, transpose
from .harmony import annotate_chords, roman_numeral


# (degree relative to tonic, quality)
Signature = Tuple[Tuple[int, ChordQuality], ...]

MAJ = ChordQuality.MAJOR
MIN = ChordQuality.MINOR

# Well-known progressions by degree pattern
COMMON_PROGRESSIONS: Dict[Signature, str] = {
    ((0, MAJ), (5, MAJ), (7, MAJ), (0, MAJ)): "I-IV-V-I",
    ((0, MAJ), (7, MAJ), (9, MIN), (5, MAJ)): "I-V-vi-IV",
    ((0, MAJ), (5, MAJ), (0, MAJ), (7, MAJ)): "I-IV-I-V",
    ((0, MIN), (10, MAJ), (5, MAJ), (7, MAJ)): "i-bVII-IV-V",
    ((0, MAJ), (9, MIN), (5, MAJ), (7, MAJ)): "I-vi-IV-V",
    ((9, MIN), (5, MAJ), (0, MAJ), (7, MAJ)): "vi-IV-I-V",
    ((0, MAJ), (9, MIN), (7, MAJ), (0, MAJ)): "I-vi-V-I",
    ((0, MAJ), (5, MAJ), (7, MAJ), (0, MAJ), (5, MAJ), (7, MAJ)): "I-IV-V-I-IV-V",
    ((2, MIN), (7, MAJ), (0, MAJ)): "ii-V-I",
    ((0, MIN), (8, MAJ), (3, MAJ), (10, MAJ)): "i-bVI-bIII-bVII",
}

# Contiguous degree patterns -> genre tags
GENRE_PATTERNS: List[Tuple[Signature, Tuple[str, ...]]] = [
    (((0, MAJ), (5, MAJ), (7, MAJ)), ("pop", "rock")),
    (((0, MAJ), (7, MAJ), (9, MIN), (5, MAJ)), ("pop", "rock")),
    (((0, MIN), (10, MAJ), (5, MAJ)), ("modern", "indie")),
    (((0, MIN), (10, MAJ), (7, MAJ)), ("modern", "indie")),
    (((9, MIN), (5, MAJ), (0, MAJ), (7, MAJ)), ("pop", "anthemic")),
    (((0, MAJ), (9, MIN), (5, MAJ), (7, MAJ)), ("classic", "ballad")),
    (((2, MIN), (7, MAJ), (0, MAJ)), ("jazz",)),
]

MINOR_QUALITIES = {ChordQuality.MINOR, ChordQuality.MINOR7}

DEFAULT_CHORD_BEATS = 4.0


@dataclass
class _Pattern:
    signature: Signature
    durations: List[float]
    section_ids: List[str] = field(default_factory=list)
    first_index: int = 0

    @property
    def count(self) -> int:
        return len(self.section_ids)


def _contains(signature: Signature, pattern: Signature) -> bool:
    n = len(pattern)
    return any(signature[i:i + n] == pattern for i in range(len(signature) - n + 1))


class ProgressionDetector:
    """Extract named progressions from converted sections."""

    def __init__(self, min_occurrences: int = 1):
        """
        Initialize ProgressionDetector.

        Args:
            min_occurrences: Sections a chord sequence must appear in to
                become a progression (1 keeps sequences that appear once)
        """
        self.min_occurrences = max(1, min_occurrences)

    def signature(self, chords: Sequence[ProjectChord], key: Key) -> Signature:
        """Key-relative (degree, quality) signature of a chord sequence."""
        return tuple((interval(key.root, c.root), c.quality) for c in chords)

    def summarize(self, sections: List[ProjectSection], key: Key) -> List[Progression]:
        """
        Build the progression collection and link sections to it.

        Args:
            sections: Converted sections; progression_id is set in place
            key: Project key the signatures are relative to

        Returns:
            Progressions ordered by usage count, then first appearance
        """
        patterns: Dict[Signature, _Pattern] = {}

        for index, section in enumerate(sections):
            if not section.chords:
                continue
            sig = self.signature(section.chords, key)
            if sig not in patterns:
                patterns[sig] = _Pattern(
                    signature=sig,
                    durations=[c.duration for c in section.chords],
                    first_index=index,
                )
            patterns[sig].section_ids.append(section.id)

        kept = [p for p in patterns.values() if p.count >= self.min_occurrences]
        kept.sort(key=lambda p: (-p.count, p.first_index))

        progressions = []
        by_signature: Dict[Signature, str] = {}
        for i, pattern in enumerate(kept):
            progression = self._build(f"prog_{i + 1}", pattern, key)
            progressions.append(progression)
            by_signature[pattern.signature] = progression.id

        for section in sections:
            if not section.chords:
                continue
            section.progression_id = by_signature.get(self.signature(section.chords, key))

        return progressions

    def name_for(self, signature: Signature) -> str:
        """Common name for a signature, else its Roman numerals (minor chords lowercase)."""
        common = COMMON_PROGRESSIONS.get(signature)
        if common is not None:
            return common
        numerals = []
        for degree, quality in signature:
            numeral = roman_numeral(degree)
            if quality in MINOR_QUALITIES:
                numeral = numeral.lower()
            numerals.append(numeral)
        return "-".join(numerals)

    def tags_for(self, signature: Signature) -> List[str]:
        tags = ["imported", "detected"]
        if signature in COMMON_PROGRESSIONS:
            tags.append("common-progression")
        for pattern, genre_tags in GENRE_PATTERNS:
            if _contains(signature, pattern):
                tags.extend(t for t in genre_tags if t not in tags)
        return tags

    def _build(self, progression_id: str, pattern: _Pattern, key: Key) -> Progression:
        chords = []
        beat = 0.0
        for (degree, quality), duration in zip(pattern.signature, pattern.durations):
            length = duration if duration and duration > 0 else DEFAULT_CHORD_BEATS
            chords.append(ProjectChord(
                root=transpose(key.root, degree),
                quality=quality,
                start_beat=beat,
                duration=length,
            ))
            beat += length
        annotate_chords(chords, key)

        return Progression(
            id=progression_id,
            name=self.name_for(pattern.signature),
            key=key,
            chords=chords,
            tags=self.tags_for(pattern.signature),
            usage_count=pattern.count,
            section_ids=list(pattern.section_ids),
        )


def summarize_progressions(
    sections: List[ProjectSection],
    key: Key,
    min_occurrences: int = 1,
) -> List[Progression]:
    """Summarize progressions with a default-configured detector."""
    return ProgressionDetector(min_occurrences=min_occurrences).summarize(sections, key)
