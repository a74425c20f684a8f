"""Tests for project exporters.

Tests cover:
- JAMS export and re-import
- Project JSON save/load
- Text structure overview and chord chart
- MIDI rendering
"""

import json
import pytest
import pretty_midi
from pathlib import Path
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from trackdraft.core import Key, Mode, SectionType
from trackdraft.core.errors import MalformedDataError
from trackdraft.input import FormatTag
from trackdraft.output import (
    MIDIExporter,
    export_chord_chart,
    export_jams,
    export_project_json,
    export_structure,
    load_project_json,
    project_to_jams,
)
from trackdraft.pipeline import detect_format, import_and_convert, import_file


# ============================================================================
# Test Fixtures - Helper functions to create test data
# ============================================================================

def two_section_song():
    """Verse [C, G, C] + Chorus [F, C], 8 seconds each at 120 BPM."""
    return {
        "title": "Two Sections",
        "artist": "Test Artist",
        "bpm": 120,
        "sections": [
            {"sectionType": "Verse", "start_ms": 0, "duration_ms": 8000, "chords": ["C", "G", "C"]},
            {"sectionType": "Chorus", "start_ms": 8000, "duration_ms": 8000, "chords": ["F", "C"]},
        ],
    }


@pytest.fixture
def project():
    return import_and_convert(two_section_song())


class TestJamsExport:
    """Exported JAMS documents import back to the same song."""

    def test_document_shape(self, project):
        """Exported JAMS is detected as JAMS and is plain JSON."""
        doc = project_to_jams(project)

        assert detect_format(doc) == FormatTag.JAMS
        assert doc["file_metadata"]["identifiers"]["source"] == "TrackDraft"
        namespaces = [a["namespace"] for a in doc["annotations"]]
        assert namespaces == ["segment_open", "chord", "key_mode", "tempo"]
        assert [s["bars"] for s in doc["sandbox"]["trackdraft"]["sections"]] == [4, 4]
        # Plain JSON all the way down
        json.dumps(doc)

    def test_chord_symbols_are_harte(self, project):
        """Chords are written as timed Harte symbols."""
        doc = project_to_jams(project)
        chords = doc["annotations"][1]["data"]
        assert [c["value"] for c in chords] == ["C:maj", "G:maj", "C:maj", "F:maj", "C:maj"]
        assert chords[1]["time"] == pytest.approx(8 / 3)

    def test_reimport(self, project):
        """Re-importing gives the same sections, chords, key and tempo."""
        restored = import_and_convert(project_to_jams(project))

        assert [s.type for s in restored.sections] == [SectionType.VERSE, SectionType.CHORUS]
        assert [s.bars for s in restored.sections] == [s.bars for s in project.sections]
        assert [c.name for c in restored.chords] == [c.name for c in project.chords]
        assert restored.key == project.key
        assert restored.metadata.bpm == project.metadata.bpm
        assert restored.metadata.title == "Two Sections"

    def test_authored_bars_survive(self, project):
        """Edited bar counts come back through the sandbox."""
        project.sections[0].bars = 6
        project.renumber_bars()

        restored = import_and_convert(project_to_jams(project))
        assert [s.bars for s in restored.sections] == [6, 4]
        assert [s.start_bar for s in restored.sections] == [0, 6]

    def test_minor_key(self, project):
        """A minor key survives the round trip."""
        project.set_key(Key(9, Mode.MINOR))
        restored = import_and_convert(project_to_jams(project))
        assert restored.key == Key(9, Mode.MINOR)

    def test_export_file(self, project, tmp_path):
        """export_jams writes a file that imports."""
        path = tmp_path / "out" / "song.jams"
        export_jams(project, str(path))

        restored = import_file(str(path))
        assert len(restored.sections) == 2


class TestProjectJson:
    """Test project JSON save and load."""

    def test_round_trip(self, project, tmp_path):
        """Saved projects load back unchanged."""
        path = tmp_path / "song.json"
        export_project_json(project, str(path))
        restored = load_project_json(str(path))

        assert restored.metadata.title == project.metadata.title
        assert restored.key == project.key
        assert [s.id for s in restored.sections] == [s.id for s in project.sections]
        assert [c.roman_numeral for c in restored.chords] == [c.roman_numeral for c in project.chords]
        assert restored.warnings == project.warnings

    def test_camel_case_layout(self, project, tmp_path):
        """Project JSON uses camelCase keys."""
        path = tmp_path / "song.json"
        export_project_json(project, str(path))
        data = json.loads(path.read_text(encoding="utf-8"))

        section = data["structure"]["sections"][0]
        assert section["startBar"] == 0
        assert section["chords"][0]["romanNumeral"] == "I"
        assert data["structure"]["totalBars"] == 8

    def test_missing_file(self, tmp_path):
        """Loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_project_json(str(tmp_path / "missing.json"))

    def test_not_a_project(self, tmp_path):
        """Other JSON documents are rejected."""
        path = tmp_path / "other.json"
        path.write_text(json.dumps(two_section_song()), encoding="utf-8")
        with pytest.raises(MalformedDataError, match="not a TrackDraft project"):
            load_project_json(str(path))

    def test_invalid_json(self, tmp_path):
        """Broken JSON is rejected."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(MalformedDataError):
            load_project_json(str(path))


class TestTextExport:
    """Test the structure overview and chord chart."""

    def test_structure(self, project):
        """The overview lists sections with times and totals."""
        text = export_structure(project)

        assert text.splitlines()[0] == "Two Sections - Test Artist"
        assert "Key: C Major | 120 BPM | 4/4" in text
        assert "0:00-0:08" in text
        assert "0:08-0:16" in text
        assert text.splitlines()[-1] == "2 sections, 8 bars"

    def test_chord_chart(self, project):
        """The chart groups chords by bar with repeat marks."""
        lines = export_chord_chart(project).splitlines()

        assert "[Verse] 4 bars" in lines
        assert "| C | G | C | % |" in lines
        assert "[Chorus] 4 bars" in lines
        assert "| F | % | C | % |" in lines

    def test_bars_per_line(self, project):
        """Chart lines wrap at bars_per_line."""
        lines = export_chord_chart(project, bars_per_line=2).splitlines()
        assert "| C | G |" in lines
        assert "| C | % |" in lines

    def test_empty_leading_bars(self, project):
        """Bars before the first chord show a dash."""
        project.sections[0].chords = project.sections[0].chords[1:]
        lines = export_chord_chart(project).splitlines()
        assert "| - | G | C | % |" in lines


class TestMidiExport:
    """Test MIDI block chord rendering."""

    def test_block_chords(self, project):
        """Each chord becomes a block chord from octave 4."""
        midi = MIDIExporter().project_to_pretty_midi(project)

        assert len(midi.instruments) == 1
        notes = sorted(midi.instruments[0].notes, key=lambda n: (n.start, n.pitch))
        assert len(notes) == 15
        assert [n.pitch for n in notes[:3]] == [60, 64, 67]
        assert notes[0].start == pytest.approx(0.0)
        assert max(n.end for n in notes) == pytest.approx(16.0)

    def test_octave(self, project):
        """The root octave is configurable."""
        midi = MIDIExporter(octave=3).project_to_pretty_midi(project)
        assert min(n.pitch for n in midi.instruments[0].notes) == 48

    def test_bass_track(self, project):
        """The bass track plays roots an octave down."""
        midi = MIDIExporter(include_bass=True).project_to_pretty_midi(project)

        assert len(midi.instruments) == 2
        bass = midi.instruments[1]
        assert bass.program == 32
        assert len(bass.notes) == 5
        assert sorted(bass.notes, key=lambda n: n.start)[0].pitch == 48

    def test_chords_stay_inside_sections(self, project):
        """Notes never run past their section."""
        # Shift the last verse chord past the section end
        project.sections[0].chords[-1].duration = 32.0
        midi = MIDIExporter().project_to_pretty_midi(project)
        verse_notes = [n for n in midi.instruments[0].notes if n.start < 8.0]
        assert max(n.end for n in verse_notes) == pytest.approx(8.0)

    def test_write_file(self, project, tmp_path):
        """Written MIDI files load back with pretty_midi."""
        path = tmp_path / "midi" / "song.mid"
        MIDIExporter().export(project, str(path))

        assert path.exists()
        loaded = pretty_midi.PrettyMIDI(str(path))
        assert sum(len(i.notes) for i in loaded.instruments) == 15
