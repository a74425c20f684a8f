"""Tests for the command-line interface."""

import json
import pytest
from pathlib import Path
from typer.testing import CliRunner
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from trackdraft.cli import app
from trackdraft.output import load_project_json


runner = CliRunner()


# ============================================================================
# Test Fixtures - Helper functions to create test data
# ============================================================================

SONG = {
    "title": "Cli Song",
    "bpm": 96,
    "sections": [
        {"sectionType": "Intro", "start_ms": 0, "duration_ms": 10000, "chords": ["C"]},
        {"sectionType": "Verse", "start_ms": 10000, "duration_ms": 20000, "chords": ["C", "G", "Am", "F"]},
    ],
}


@pytest.fixture
def song_file(tmp_path):
    path = tmp_path / "song.json"
    path.write_text(json.dumps(SONG), encoding="utf-8")
    return path


class TestDetectCommand:
    """Test the detect command."""

    def test_segment_list(self, song_file):
        """A segment list is reported as mcgill-billboard."""
        result = runner.invoke(app, ["detect", str(song_file)])
        assert result.exit_code == 0
        assert "mcgill-billboard" in result.output

    def test_unknown(self, tmp_path):
        """An unrecognized document is reported as unknown."""
        path = tmp_path / "other.json"
        path.write_text('{"foo": 1}', encoding="utf-8")
        result = runner.invoke(app, ["detect", str(path)])
        assert result.exit_code == 0
        assert "unknown" in result.output

    def test_missing_file(self, tmp_path):
        """A missing file exits with code 1."""
        result = runner.invoke(app, ["detect", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestImportCommand:
    """Test the import command."""

    def test_writes_project(self, song_file, tmp_path):
        """Import writes a loadable project JSON."""
        output = tmp_path / "project.json"
        result = runner.invoke(app, ["import", str(song_file), "-o", str(output)])

        assert result.exit_code == 0
        project = load_project_json(str(output))
        assert project.metadata.title == "Cli Song"
        assert project.metadata.bpm == 96.0
        assert [s.bars for s in project.sections] == [4, 8]

    def test_default_output_path(self, song_file):
        """Without -o the project is written next to the input."""
        result = runner.invoke(app, ["import", str(song_file)])
        assert result.exit_code == 0
        assert song_file.with_suffix(".trackdraft.json").exists()

    def test_json_summary(self, song_file, tmp_path):
        """--json prints a machine-readable summary."""
        result = runner.invoke(
            app, ["import", str(song_file), "-o", str(tmp_path / "p.json"), "--json"]
        )
        assert result.exit_code == 0
        assert '"sections": 2' in result.output
        assert '"bars": 12' in result.output

    def test_unknown_format(self, tmp_path):
        """An unknown format exits with an error."""
        path = tmp_path / "other.json"
        path.write_text('{"foo": 1}', encoding="utf-8")
        result = runner.invoke(app, ["import", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unsupported_extension(self, tmp_path):
        """Files other than .json/.jams are rejected."""
        path = tmp_path / "song.txt"
        path.write_text("{}", encoding="utf-8")
        result = runner.invoke(app, ["import", str(path)])
        assert result.exit_code == 1

    def test_overflowing_numbers(self, tmp_path):
        """Absurdly large values exit with an error message, not a traceback."""
        path = tmp_path / "huge.json"
        path.write_text(json.dumps({
            "bpm": 1e10,
            "sections": [{"sectionType": "Verse", "start_ms": 0, "duration_ms": 1e308}],
        }), encoding="utf-8")
        result = runner.invoke(app, ["import", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestChartCommand:
    """Test the chart command."""

    def test_chord_chart(self, song_file):
        """The chart shows bars with repeat marks."""
        result = runner.invoke(app, ["chart", str(song_file)])
        assert result.exit_code == 0
        assert "[Intro] 4 bars" in result.output
        assert "| C | % | % | % |" in result.output

    def test_structure(self, song_file):
        """--structure prints the section overview."""
        result = runner.invoke(app, ["chart", str(song_file), "--structure"])
        assert result.exit_code == 0
        assert "2 sections, 12 bars" in result.output

    def test_reads_project_json(self, song_file, tmp_path):
        """A saved project JSON can be charted directly."""
        output = tmp_path / "project.json"
        runner.invoke(app, ["import", str(song_file), "-o", str(output)])

        result = runner.invoke(app, ["chart", str(output)])
        assert result.exit_code == 0
        assert "[Verse] 8 bars" in result.output


class TestExportCommands:
    """Test the export-jams and midi commands."""

    def test_export_jams(self, song_file, tmp_path):
        """export-jams writes a JAMS document."""
        output = tmp_path / "song.jams"
        result = runner.invoke(app, ["export-jams", str(song_file), "-o", str(output)])

        assert result.exit_code == 0
        doc = json.loads(output.read_text(encoding="utf-8"))
        assert doc["file_metadata"]["title"] == "Cli Song"

    def test_midi(self, song_file, tmp_path):
        """midi writes a MIDI file."""
        output = tmp_path / "song.mid"
        result = runner.invoke(app, ["midi", str(song_file), "-o", str(output), "--bass"])
        assert result.exit_code == 0
        assert output.exists()


class TestLyricCommands:
    """Test the syllables and rhymes commands."""

    def test_syllables(self):
        """syllables prints the count and stress pattern."""
        result = runner.invoke(app, ["syllables", "Hello world"])
        assert result.exit_code == 0
        assert "Total: 3 syllables" in result.output
        assert "Stress: 10" in result.output

    def test_syllables_compare(self):
        """--compare prints the rhythm score and bucket."""
        result = runner.invoke(app, ["syllables", "Hello world", "-c", "Hi there"])
        assert result.exit_code == 0
        assert "77 (close)" in result.output

    def test_rhymes(self, tmp_path):
        """rhymes prints the rhyme scheme."""
        path = tmp_path / "lyrics.txt"
        path.write_text(
            "I see the light\nYou feel it right\nWe walk away\nNo more delay\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["rhymes", str(path)])
        assert result.exit_code == 0
        assert "AABB" in result.output

    def test_rhymes_missing_file(self, tmp_path):
        """A missing lyrics file exits with code 1."""
        result = runner.invoke(app, ["rhymes", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
