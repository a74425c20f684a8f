"""Annotation bundle - the format-agnostic result of an importer.

Bundles are transient: an importer produces one and the converter consumes
it within a single import.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .key import Key


@dataclass
class BundleMetadata:
    """Song-level metadata carried over from the source file."""

    title: str = "Untitled"
    artist: Optional[str] = None
    album: Optional[str] = None
    duration: Optional[float] = None  # Seconds
    tempo: Optional[float] = None  # BPM, only when the source authored one
    source: str = ""  # Provenance tag (dataset name)


@dataclass
class Segment:
    """A time-bounded structural region (verse, chorus, ...)."""

    time: float  # Start time in seconds
    duration: float  # Seconds
    label: str
    confidence: float = 0.8
    bars_hint: Optional[int] = None  # Authored bar count, if the source has one

    @property
    def end_time(self) -> float:
        return self.time + self.duration


@dataclass
class ChordEvent:
    """A single timestamped chord occurrence."""

    time: float  # Start time in seconds
    duration: float  # Seconds
    symbol: str  # Chord symbol, usually Harte notation
    confidence: Optional[float] = None

    @property
    def end_time(self) -> float:
        return self.time + self.duration


@dataclass
class AnnotationBundle:
    """Container for everything an importer extracted from a source file."""

    metadata: BundleMetadata = field(default_factory=BundleMetadata)
    segments: List[Segment] = field(default_factory=list)
    chord_events: List[ChordEvent] = field(default_factory=list)
    key_hint: Optional[Key] = None
    tempo_hint: Optional[float] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def total_duration(self) -> float:
        """Duration from metadata, else the end of the last segment or chord."""
        if self.metadata.duration:
            return self.metadata.duration
        ends = [s.end_time for s in self.segments] + [c.end_time for c in self.chord_events]
        return max(ends) if ends else 0.0
