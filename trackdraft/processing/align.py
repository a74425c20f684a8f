"""Chord-to-section alignment.

Chord events carry absolute times in seconds; sections want chords on a
beat grid relative to their own start. An event belongs to every section
it overlaps (half-open: event_end > start and event_start < end), so a
chord that straddles a boundary shows up in both sections.
"""

from enum import Enum
from typing import Iterable, List

from ..analysis import parse_chord_symbol
from ..core import ChordEvent, ProjectChord


class AlignmentPolicy(Enum):
    """How chord events that cross a section boundary are placed."""

    # Clip the event to the section: start_beat >= 0, duration within the section
    CLIP = "clip"
    # Keep the unclipped event times relative to section start (start_beat may be negative)
    PRESERVE = "preserve"


def seconds_to_beats(seconds: float, bpm: float) -> float:
    """Convert a duration in seconds to beats at the given tempo."""
    return seconds * bpm / 60.0


def overlaps(event: ChordEvent, start: float, end: float) -> bool:
    """Half-open overlap test between an event and a section's time range."""
    return event.end_time > start and event.time < end


def straddles(event: ChordEvent, start: float, end: float) -> bool:
    """True if an overlapping event extends past either boundary of the range."""
    return overlaps(event, start, end) and (event.time < start or event.end_time > end)


def chords_in_range(
    events: Iterable[ChordEvent],
    start: float,
    end: float,
    bpm: float,
    policy: AlignmentPolicy = AlignmentPolicy.CLIP,
) -> List[ProjectChord]:
    """
    Place the chord events overlapping a time range on its beat grid.

    Args:
        events: Chord events sorted by time
        start: Range start in seconds
        end: Range end in seconds
        bpm: Tempo used to convert seconds to beats
        policy: Boundary handling for events that cross the range

    Returns:
        Project chords with start_beat relative to the range start
    """
    chords = []
    for event in events:
        if not overlaps(event, start, end):
            continue

        if policy == AlignmentPolicy.CLIP:
            event_start = max(event.time, start)
            event_end = min(event.end_time, end)
        else:
            event_start = event.time
            event_end = event.end_time

        chord = parse_chord_symbol(event.symbol)
        chords.append(ProjectChord(
            root=chord.root,
            quality=chord.quality,
            start_beat=seconds_to_beats(event_start - start, bpm),
            duration=seconds_to_beats(event_end - event_start, bpm),
            confidence=event.confidence,
        ))
    return chords
