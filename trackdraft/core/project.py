"""Project model - the application's internal song representation.

Projects are produced by the converter (or built by editing code) and
serialize to the camelCase JSON shape the application stores.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .chord import Chord, ChordQuality
from .constants import DEFAULT_TEMPO, DEFAULT_TIME_SIGNATURE, PROJECT_VERSION
from .key import DEFAULT_KEY, Key, Mode


class SectionType(Enum):
    """Types of song sections."""

    INTRO = "intro"
    VERSE = "verse"
    CHORUS = "chorus"
    BRIDGE = "bridge"
    OUTRO = "outro"
    TRANSITION = "transition"


class HarmonicFunction(Enum):
    """Role of a chord relative to the key."""

    TONIC = "tonic"
    SUBDOMINANT = "subdominant"
    DOMINANT = "dominant"


SECTION_COLORS = {
    SectionType.INTRO: 0x4A90E2,  # Blue
    SectionType.VERSE: 0x7ED321,  # Green
    SectionType.CHORUS: 0xF5A623,  # Orange
    SectionType.BRIDGE: 0xBD10E0,  # Purple
    SectionType.OUTRO: 0x50E3C2,  # Cyan
    SectionType.TRANSITION: 0x9013FE,  # Violet
}


def new_section_id() -> str:
    """Fresh section identifier; never reused across imports."""
    return f"section_{uuid.uuid4().hex[:12]}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ProjectChord:
    """A chord placed on the beat grid of a section.

    roman_numeral and function are derived from the project key by the
    harmony layer and are overwritten whenever the key changes.
    """

    root: int  # Pitch class 0-11
    quality: ChordQuality
    start_beat: float = 0.0  # Relative to section start
    duration: float = 4.0  # Beats
    confidence: Optional[float] = None
    roman_numeral: str = "I"
    function: HarmonicFunction = HarmonicFunction.TONIC

    @property
    def chord(self) -> Chord:
        return Chord(self.root, self.quality)

    @property
    def notes(self) -> List[int]:
        return self.chord.notes

    @property
    def name(self) -> str:
        return self.chord.name

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "root": self.root,
            "type": self.quality.value,
            "name": self.name,
            "romanNumeral": self.roman_numeral,
            "function": self.function.value,
            "notes": self.notes,
            "startBeat": self.start_beat,
            "duration": self.duration,
        }
        if self.confidence is not None:
            data["confidence"] = self.confidence
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectChord":
        return cls(
            root=int(data.get("root", 0)),
            quality=ChordQuality.from_value(data.get("type", "major")),
            start_beat=float(data.get("startBeat", 0.0)),
            duration=float(data.get("duration", 4.0)),
            confidence=data.get("confidence"),
        )


@dataclass
class ProjectSection:
    """Represents a section of a song."""

    type: SectionType
    bars: int
    start_bar: int = 0
    start_time: float = 0.0  # Seconds
    end_time: float = 0.0  # Seconds
    name: str = ""
    tempo: float = DEFAULT_TEMPO
    time_signature: Tuple[int, int] = DEFAULT_TIME_SIGNATURE
    chords: List[ProjectChord] = field(default_factory=list)
    progression_id: Optional[str] = None
    id: str = field(default_factory=new_section_id)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def color(self) -> int:
        return SECTION_COLORS[self.type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name or self.type.value.capitalize(),
            "type": self.type.value,
            "bars": self.bars,
            "tempo": self.tempo,
            "timeSignature": {
                "numerator": self.time_signature[0],
                "denominator": self.time_signature[1],
            },
            "startTime": self.start_time,
            "endTime": self.end_time,
            "startBar": self.start_bar,
            "color": self.color,
            "chords": [c.to_dict() for c in self.chords],
            "chordProgressionId": self.progression_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectSection":
        try:
            section_type = SectionType(data.get("type", "bridge"))
        except ValueError:
            section_type = SectionType.BRIDGE
        ts = data.get("timeSignature") or {}
        return cls(
            id=data.get("id") or new_section_id(),
            name=data.get("name", ""),
            type=section_type,
            bars=max(1, int(data.get("bars", 1))),
            start_bar=int(data.get("startBar", 0)),
            start_time=float(data.get("startTime", 0.0)),
            end_time=float(data.get("endTime", 0.0)),
            tempo=float(data.get("tempo", DEFAULT_TEMPO)),
            time_signature=(
                int(ts.get("numerator", DEFAULT_TIME_SIGNATURE[0])),
                int(ts.get("denominator", DEFAULT_TIME_SIGNATURE[1])),
            ),
            chords=[ProjectChord.from_dict(c) for c in data.get("chords") or []],
            progression_id=data.get("chordProgressionId"),
        )


@dataclass
class Progression:
    """A named, reusable chord sequence found in one or more sections."""

    id: str
    name: str
    key: Key
    chords: List[ProjectChord] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    usage_count: int = 1
    section_ids: List[str] = field(default_factory=list)
    created: str = field(default_factory=utc_timestamp)
    modified: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "key": {"root": self.key.root, "scale": self.key.mode.value},
            "chords": [c.to_dict() for c in self.chords],
            "tags": list(self.tags),
            "usageCount": self.usage_count,
            "sectionIds": list(self.section_ids),
            "created": self.created,
            "modified": self.modified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Progression":
        key_data = data.get("key") or {}
        mode = Mode.MINOR if key_data.get("scale") == "minor" else Mode.MAJOR
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            key=Key(int(key_data.get("root", 0)), mode),
            chords=[ProjectChord.from_dict(c) for c in data.get("chords") or []],
            tags=list(data.get("tags") or []),
            usage_count=int(data.get("usageCount", 1)),
            section_ids=list(data.get("sectionIds") or []),
            created=data.get("created") or utc_timestamp(),
            modified=data.get("modified") or utc_timestamp(),
        )


@dataclass
class ProjectMetadata:
    """Song-level metadata."""

    title: str = "Untitled"
    artist: Optional[str] = None
    album: Optional[str] = None
    bpm: float = DEFAULT_TEMPO
    key: Key = DEFAULT_KEY
    time_signature: Tuple[int, int] = DEFAULT_TIME_SIGNATURE
    created: str = field(default_factory=utc_timestamp)
    modified: str = field(default_factory=utc_timestamp)
    tags: List[str] = field(default_factory=list)


@dataclass
class Project:
    """A complete song project: structure, harmony and metadata."""

    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)
    sections: List[ProjectSection] = field(default_factory=list)
    progressions: List[Progression] = field(default_factory=list)
    total_duration: float = 0.0
    warnings: List[str] = field(default_factory=list)
    version: str = PROJECT_VERSION

    @property
    def key(self) -> Key:
        return self.metadata.key

    @property
    def total_bars(self) -> int:
        return sum(s.bars for s in self.sections)

    @property
    def chords(self) -> List[ProjectChord]:
        """All chords in section order."""
        return [c for s in self.sections for c in s.chords]

    def renumber_bars(self) -> None:
        """Recompute start_bar as the running total of prior sections' bars."""
        start_bar = 0
        for section in self.sections:
            section.start_bar = start_bar
            start_bar += section.bars

    def set_key(self, key: Key) -> None:
        """Change the project key and re-derive every chord's numeral and function."""
        from ..inference.harmony import annotate_chords

        self.metadata.key = key
        annotate_chords(self.chords, key)
        self.touch()

    def add_section(self, section: ProjectSection, index: Optional[int] = None) -> None:
        from ..inference.harmony import annotate_chords

        if index is None:
            self.sections.append(section)
        else:
            self.sections.insert(index, section)
        annotate_chords(section.chords, self.key)
        self.renumber_bars()
        self.touch()

    def remove_section(self, section_id: str) -> ProjectSection:
        """
        Remove a section by id.

        Raises:
            KeyError: If no section has that id
        """
        for i, section in enumerate(self.sections):
            if section.id == section_id:
                removed = self.sections.pop(i)
                self.renumber_bars()
                self.touch()
                return removed
        raise KeyError(section_id)

    def touch(self) -> None:
        self.metadata.modified = utc_timestamp()

    def to_dict(self) -> Dict[str, Any]:
        meta = self.metadata
        return {
            "version": self.version,
            "metadata": {
                "title": meta.title,
                "artist": meta.artist,
                "album": meta.album,
                "bpm": meta.bpm,
                "key": meta.key.name,
                "timeSignature": {
                    "numerator": meta.time_signature[0],
                    "denominator": meta.time_signature[1],
                },
                "created": meta.created,
                "modified": meta.modified,
                "tags": list(meta.tags),
            },
            "structure": {
                "sections": [s.to_dict() for s in self.sections],
                "totalDuration": self.total_duration,
                "totalBars": self.total_bars,
            },
            "harmony": {
                "progressions": [p.to_dict() for p in self.progressions],
            },
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """
        Rebuild a project from its serialized mapping.

        Roman numerals and functions are re-derived from the stored key
        rather than read back.
        """
        from ..inference.harmony import annotate_chords

        meta_data = data.get("metadata") or {}
        structure = data.get("structure") or {}
        harmony = data.get("harmony") or {}
        ts = meta_data.get("timeSignature") or {}

        metadata = ProjectMetadata(
            title=meta_data.get("title") or "Untitled",
            artist=meta_data.get("artist"),
            album=meta_data.get("album"),
            bpm=float(meta_data.get("bpm") or DEFAULT_TEMPO),
            key=Key.parse(meta_data.get("key") or "") or DEFAULT_KEY,
            time_signature=(
                int(ts.get("numerator", DEFAULT_TIME_SIGNATURE[0])),
                int(ts.get("denominator", DEFAULT_TIME_SIGNATURE[1])),
            ),
            created=meta_data.get("created") or utc_timestamp(),
            modified=meta_data.get("modified") or utc_timestamp(),
            tags=list(meta_data.get("tags") or []),
        )
        project = cls(
            metadata=metadata,
            sections=[ProjectSection.from_dict(s) for s in structure.get("sections") or []],
            progressions=[Progression.from_dict(p) for p in harmony.get("progressions") or []],
            total_duration=float(structure.get("totalDuration") or 0.0),
            warnings=list(data.get("warnings") or []),
            version=data.get("version") or PROJECT_VERSION,
        )
        project.renumber_bars()
        annotate_chords(project.chords, project.key)
        for progression in project.progressions:
            annotate_chords(progression.chords, progression.key)
        return project
