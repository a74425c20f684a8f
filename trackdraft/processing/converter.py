"""Bundle to project conversion.

Turns an AnnotationBundle into a Project:
- One section per segment, in order, with a running start bar
- Chord events aligned onto each section's beat grid
- Key from the source, else detected from chord roots, else C major
- Roman numerals and harmonic functions relative to the key
- Optional progression summary

Alignment always succeeds for a valid bundle. The inference steps after it
run in isolation: a failure in one is reported as an InferenceWarning and
the project is still returned.
"""

import warnings
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, TypeVar

from ..core import (
    AnnotationBundle,
    Key,
    Project,
    ProjectMetadata,
    ProjectSection,
    DEFAULT_KEY,
)
from ..core.constants import BEATS_PER_BAR, DEFAULT_TEMPO
from ..core.errors import InferenceWarning
from ..inference.harmony import annotate_chords
from ..inference.key import ChordKeyDetector
from ..inference.progressions import ProgressionDetector
from ..inference.structure import estimate_bars, map_section_type, section_name
from .align import AlignmentPolicy, chords_in_range, overlaps, straddles


T = TypeVar("T")

BASE_TAGS = ["imported", "mir-dataset"]


@dataclass
class ConverterConfig:
    """Configuration for bundle conversion.

    Attributes:
        default_tempo: BPM used when the bundle has no tempo (default: 120)
        default_key: Key used when none is annotated or detectable (default: C major)
        alignment_policy: Boundary handling for chords (default: CLIP)
        detect_progressions: Whether to summarize progressions (default: True)
        min_progression_occurrences: Sections a sequence must appear in (default: 1)
        beats_per_bar: Beats per bar for bar estimates (default: 4)
    """

    default_tempo: float = DEFAULT_TEMPO
    default_key: Key = DEFAULT_KEY
    alignment_policy: AlignmentPolicy = AlignmentPolicy.CLIP
    detect_progressions: bool = True
    min_progression_occurrences: int = 1
    beats_per_bar: int = BEATS_PER_BAR


@dataclass
class ConversionStats:
    """Statistics from a conversion."""

    segments: int = 0
    chord_events: int = 0
    placed_chords: int = 0
    unplaced_events: int = 0  # Events outside every segment
    straddling_events: int = 0  # Events crossing a section boundary
    key_source: str = ""  # "annotated", "inferred" or "default"
    progressions: int = 0
    inference_failures: int = 0


class ProjectConverter:
    """Convert annotation bundles into projects."""

    def __init__(
        self,
        alignment_policy: AlignmentPolicy = AlignmentPolicy.CLIP,
        detect_progressions: bool = True,
        config: Optional[ConverterConfig] = None,
    ):
        """Initialize ProjectConverter.

        Args:
            alignment_policy: Boundary handling for chords
            detect_progressions: Whether to summarize progressions
            config: Optional ConverterConfig for advanced settings
        """
        if config is not None:
            self.config = config
        else:
            self.config = ConverterConfig(
                alignment_policy=alignment_policy,
                detect_progressions=detect_progressions,
            )
        self.key_detector = ChordKeyDetector()

    def convert(
        self,
        bundle: AnnotationBundle,
        return_stats: bool = False,
    ) -> Project | Tuple[Project, ConversionStats]:
        """Convert a bundle into a project.

        Args:
            bundle: Importer output
            return_stats: Whether to return conversion statistics

        Returns:
            The project, optionally with statistics
        """
        stats = ConversionStats(
            segments=len(bundle.segments),
            chord_events=len(bundle.chord_events),
        )
        bpm = self._tempo(bundle)

        project = Project(
            metadata=ProjectMetadata(
                title=bundle.metadata.title or "Untitled",
                artist=bundle.metadata.artist,
                album=bundle.metadata.album,
                bpm=bpm,
                key=self.config.default_key,
                time_signature=(self.config.beats_per_bar, 4),
                tags=list(BASE_TAGS),
            ),
            total_duration=bundle.total_duration,
            warnings=list(bundle.warnings),
        )

        project.sections = self._align(bundle, bpm, stats)

        key = self._run_isolated(project, stats, "Key detection", lambda: self._key(bundle, project, stats))
        if key is None:
            key = self.config.default_key
            stats.key_source = "default"
            if "key-default" not in project.metadata.tags:
                project.metadata.tags.append("key-default")
        project.metadata.key = key

        self._run_isolated(
            project, stats, "Harmonic analysis",
            lambda: annotate_chords(project.chords, project.key),
        )

        if self.config.detect_progressions:
            progressions = self._run_isolated(
                project, stats, "Progression detection",
                lambda: ProgressionDetector(
                    min_occurrences=self.config.min_progression_occurrences,
                ).summarize(project.sections, project.key),
            )
            if progressions:
                project.progressions = progressions
                project.metadata.tags.append("detected-progressions")
            stats.progressions = len(project.progressions)

        if return_stats:
            return project, stats
        return project

    def _tempo(self, bundle: AnnotationBundle) -> float:
        for bpm in (bundle.tempo_hint, bundle.metadata.tempo):
            if bpm is not None and bpm > 0:
                return bpm
        return self.config.default_tempo

    def _align(self, bundle: AnnotationBundle, bpm: float, stats: ConversionStats) -> List[ProjectSection]:
        sections = []
        start_bar = 0

        for segment in bundle.segments:
            section_type = map_section_type(segment.label)
            if segment.bars_hint is not None and segment.bars_hint > 0:
                bars = segment.bars_hint
            else:
                bars = estimate_bars(segment.duration, bpm, self.config.beats_per_bar)

            chords = chords_in_range(
                bundle.chord_events,
                segment.time,
                segment.end_time,
                bpm,
                self.config.alignment_policy,
            )
            stats.placed_chords += len(chords)

            sections.append(ProjectSection(
                type=section_type,
                bars=bars,
                start_bar=start_bar,
                start_time=segment.time,
                end_time=segment.end_time,
                name=section_name(segment.label, section_type),
                tempo=bpm,
                time_signature=(self.config.beats_per_bar, 4),
                chords=chords,
            ))
            start_bar += bars

        for event in bundle.chord_events:
            hits = [s for s in bundle.segments if overlaps(event, s.time, s.end_time)]
            if not hits:
                stats.unplaced_events += 1
            elif any(straddles(event, s.time, s.end_time) for s in hits):
                stats.straddling_events += 1

        return sections

    def _key(self, bundle: AnnotationBundle, project: Project, stats: ConversionStats) -> Key:
        if bundle.key_hint is not None:
            stats.key_source = "annotated"
            return bundle.key_hint

        key = self.key_detector.detect(bundle.chord_events)
        if key is not None:
            stats.key_source = "inferred"
            project.metadata.tags.append("key-inferred")
            return key

        stats.key_source = "default"
        project.metadata.tags.append("key-default")
        self._warn(project, f"No chords to detect a key from; using {self.config.default_key.name}")
        return self.config.default_key

    def _run_isolated(
        self,
        project: Project,
        stats: ConversionStats,
        step: str,
        func: Callable[[], T],
    ) -> Optional[T]:
        try:
            return func()
        except Exception as e:
            stats.inference_failures += 1
            self._warn(project, f"{step} failed: {e}")
            return None

    @staticmethod
    def _warn(project: Project, message: str) -> None:
        warnings.warn(message, InferenceWarning, stacklevel=3)
        project.warnings.append(message)


def convert_bundle(
    bundle: AnnotationBundle,
    config: Optional[ConverterConfig] = None,
) -> Project:
    """Convert a bundle with the given (or default) configuration."""
    return ProjectConverter(config=config).convert(bundle)
