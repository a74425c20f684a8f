"""MIDI export functionality."""

import pretty_midi
from pathlib import Path

from ..core import CHORD_TEMPLATES, Project, ProjectChord, ProjectSection


class MIDIExporter:
    """Export a project's chords to MIDI as block chords."""

    def __init__(
        self,
        octave: int = 4,
        velocity: int = 80,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
        include_bass: bool = False,
        bass_program: int = 32,
    ):
        """
        Initialize MIDIExporter.

        Args:
            octave: Octave of chord roots (4 puts C on MIDI 60)
            velocity: Note velocity (0-127)
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
            include_bass: Add a second instrument playing chord roots an octave down
            bass_program: MIDI program number of the bass instrument
        """
        self.octave = octave
        self.velocity = velocity
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program
        self.include_bass = include_bass
        self.bass_program = bass_program

    def export(self, project: Project, output_path: str) -> None:
        """
        Export a project to a MIDI file.

        Args:
            project: Project to render
            output_path: Path to output MIDI file
        """
        midi = self.project_to_pretty_midi(project)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(str(output_path))

    def project_to_pretty_midi(self, project: Project) -> pretty_midi.PrettyMIDI:
        """Convert a project to a PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(initial_tempo=project.metadata.bpm)

        chords = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )
        bass = pretty_midi.Instrument(program=self.bass_program, name="Bass")

        for section in project.sections:
            for chord in section.chords:
                span = self._chord_span(section, chord)
                if span is None:
                    continue
                start, end = span
                for pitch in self.chord_pitches(chord):
                    chords.notes.append(pretty_midi.Note(
                        velocity=self.velocity, pitch=pitch, start=start, end=end,
                    ))
                if self.include_bass:
                    bass.notes.append(pretty_midi.Note(
                        velocity=self.velocity, pitch=self._root_pitch(chord) - 12,
                        start=start, end=end,
                    ))

        midi.instruments.append(chords)
        if self.include_bass:
            midi.instruments.append(bass)
        return midi

    def chord_pitches(self, chord: ProjectChord):
        """MIDI pitches of a chord voiced upward from its root."""
        root = self._root_pitch(chord)
        return [root + step for step in CHORD_TEMPLATES[chord.quality]]

    def _root_pitch(self, chord: ProjectChord) -> int:
        return 12 * (self.octave + 1) + chord.root

    @staticmethod
    def _chord_span(section: ProjectSection, chord: ProjectChord):
        """Absolute (start, end) in seconds, kept inside the section."""
        seconds_per_beat = 60.0 / section.tempo
        start = section.start_time + chord.start_beat * seconds_per_beat
        end = start + chord.duration * seconds_per_beat
        start = max(start, section.start_time)
        if section.end_time > section.start_time:
            end = min(end, section.end_time)
        if end <= start:
            return None
        return start, end
