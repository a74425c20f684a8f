"""Command-line interface for TrackDraft.

Provides commands for:
- detect: Identify the format of an annotation file
- import: Convert an annotation file to a project
- chart: Print a chord chart or structure overview
- export-jams / midi: Export a project
- syllables / rhymes: Lyric helpers
"""

import typer
import warnings
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="trackdraft",
    help="Music annotation import and song-structure tools",
    rich_markup_mode="markdown",
)
console = Console()


def _require_file(path: Path) -> None:
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)


def _load_project(
    input_file: Path,
    policy: str = "clip",
    detect_progressions: bool = True,
    trust_tempo: bool = False,
):
    """Load a project JSON file, or import and convert an annotation file."""
    from .core import Project
    from .core.errors import AnnotationImportError, InferenceWarning
    from .input import load_annotation_file
    from .pipeline import import_and_convert
    from .processing import AlignmentPolicy, ConverterConfig

    _require_file(input_file)

    try:
        policy_value = AlignmentPolicy(policy.lower())
    except ValueError:
        console.print(f"[yellow]Unknown policy '{policy}', using 'clip'[/yellow]")
        policy_value = AlignmentPolicy.CLIP

    config = ConverterConfig(
        alignment_policy=policy_value,
        detect_progressions=detect_progressions,
    )

    try:
        document = load_annotation_file(str(input_file))
        if isinstance(document, dict) and "structure" in document and "metadata" in document:
            return Project.from_dict(document)

        # Inference warnings are shown from project.warnings instead
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", InferenceWarning)
            return import_and_convert(
                document, config=config, trust_placeholder_tempo=trust_tempo
            )
    except (AnnotationImportError, ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def detect(
    input_file: Path = typer.Argument(..., help="Annotation file (.json or .jams)"),
):
    """Detect the annotation format of a file."""
    from .core.errors import AnnotationImportError
    from .input import load_annotation_file
    from .pipeline import detect_format

    _require_file(input_file)

    try:
        document = load_annotation_file(str(input_file))
    except (AnnotationImportError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(detect_format(document).value)


@app.command("import")
def import_file(
    input_file: Path = typer.Argument(..., help="Annotation file (.json or .jams)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output project JSON (default: <input>.trackdraft.json)"
    ),
    no_progressions: bool = typer.Option(
        False, "--no-progressions", help="Skip progression detection"
    ),
    policy: str = typer.Option(
        "clip", "--policy", help="Boundary chords: clip (to each section) or preserve (raw offsets)"
    ),
    trust_tempo: bool = typer.Option(
        False, "--trust-tempo", help="Keep a 120 BPM value from McGill/SALAMI files"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show every chord"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Import an annotation file and write a project JSON.

    **Examples:**

        trackdraft import song.jams

        trackdraft import billboard_0003.json -o song.json --trust-tempo
    """
    from .output import export_project_json

    project = _load_project(
        input_file,
        policy=policy,
        detect_progressions=not no_progressions,
        trust_tempo=trust_tempo,
    )

    if output is None:
        output = input_file.with_suffix(".trackdraft.json")
    export_project_json(project, str(output))

    if json_output:
        console.print_json(data={
            "input": str(input_file),
            "output": str(output),
            "title": project.metadata.title,
            "key": project.key.name,
            "bpm": project.metadata.bpm,
            "sections": len(project.sections),
            "bars": project.total_bars,
            "progressions": len(project.progressions),
            "warnings": project.warnings,
        })
        return

    console.print(f"\n[bold blue]{project.metadata.title}[/bold blue]")
    if project.metadata.artist:
        console.print(f"  Artist: {project.metadata.artist}")
    console.print(f"  Key: {project.key.name}, {project.metadata.bpm:g} BPM")

    _show_sections_table(project)
    if verbose:
        _show_chords_table(project)
    if project.progressions:
        _show_progressions_table(project)

    for message in project.warnings:
        console.print(f"[yellow]Warning: {message}[/yellow]")

    console.print(f"[green]Project written to:[/green] {output}")


@app.command()
def chart(
    input_file: Path = typer.Argument(..., help="Project JSON or annotation file"),
    structure: bool = typer.Option(
        False, "--structure", help="Print the section overview instead of chords"
    ),
    bars_per_line: int = typer.Option(4, "--bars-per-line", help="Bars per chart line"),
):
    """Print a chord chart for a project or annotation file."""
    from .output import export_chord_chart, export_structure

    project = _load_project(input_file)
    if structure:
        console.print(export_structure(project), markup=False, highlight=False)
    else:
        console.print(export_chord_chart(project, bars_per_line), markup=False, highlight=False)


@app.command("export-jams")
def export_jams_command(
    input_file: Path = typer.Argument(..., help="Project JSON or annotation file"),
    output: Path = typer.Option(..., "-o", "--output", help="Output .jams file"),
):
    """Export a project as JAMS."""
    from .output import export_jams

    project = _load_project(input_file)
    export_jams(project, str(output))
    console.print(f"[green]JAMS written to:[/green] {output}")


@app.command()
def midi(
    input_file: Path = typer.Argument(..., help="Project JSON or annotation file"),
    output: Path = typer.Option(..., "-o", "--output", help="Output MIDI file"),
    bass: bool = typer.Option(False, "--bass", help="Add a bass line on chord roots"),
    octave: int = typer.Option(4, "--octave", help="Octave of chord roots"),
):
    """Render a project's chords to MIDI."""
    from .output import MIDIExporter

    project = _load_project(input_file)
    exporter = MIDIExporter(octave=octave, include_bass=bass)
    exporter.export(project, str(output))
    console.print(f"[green]MIDI written to:[/green] {output}")


@app.command()
def syllables(
    text: str = typer.Argument(..., help="A word or lyric line"),
    compare: Optional[str] = typer.Option(
        None, "--compare", "-c", help="Second line to compare rhythm against"
    ),
):
    """Count syllables in a line of lyrics."""
    from .lyrics import analyze_line, compare_rhythm, rhythm_match_quality

    analysis = analyze_line(text)

    table = Table(title="Syllables")
    table.add_column("Word", style="cyan")
    table.add_column("Syllables", style="green")
    table.add_column("Breakdown", style="yellow")
    for word in analysis.words:
        table.add_row(word.word, str(word.syllables), "-".join(word.breakdown))
    console.print(table)

    console.print(f"  Total: {analysis.syllable_count} syllables")
    console.print(f"  Stress: {analysis.stress_pattern}")
    console.print(f"  Estimated duration: {analysis.estimated_duration:g} beats")

    if compare is not None:
        score = compare_rhythm(text, compare)
        quality = rhythm_match_quality(score)
        color = {"good": "green", "close": "yellow"}.get(quality, "red")
        console.print(f"  Rhythm match: [{color}]{score} ({quality})[/{color}]")


@app.command()
def rhymes(
    input_file: Path = typer.Argument(..., help="Lyrics text file"),
):
    """Analyze the rhyme scheme of a lyrics file."""
    from .lyrics import analyze_rhyme_scheme

    _require_file(input_file)
    result = analyze_rhyme_scheme(input_file.read_text(encoding="utf-8"))

    console.print(f"\n[bold]Rhyme scheme:[/bold] {result.scheme}")

    if not result.groups:
        console.print("[yellow]No rhyming line endings found[/yellow]")
        return

    table = Table(title="Rhyme Groups")
    table.add_column("Letter", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Words", style="yellow")
    table.add_column("Lines", style="magenta")
    for group in result.groups:
        table.add_row(
            group.letter,
            group.rhyme_type.value,
            ", ".join(w.word for w in group.words),
            ", ".join(str(w.line_index + 1) for w in group.words),
        )
    console.print(table)


def _show_sections_table(project):
    """Display sections in a table."""
    table = Table(title="Sections")
    table.add_column("Section", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Start bar", style="yellow")
    table.add_column("Bars", style="yellow")
    table.add_column("Time", style="blue")
    table.add_column("Chords", style="magenta")
    table.add_column("Progression", style="magenta")

    for section in project.sections:
        table.add_row(
            section.name,
            section.type.value,
            str(section.start_bar),
            str(section.bars),
            f"{section.start_time:.2f}-{section.end_time:.2f}s",
            str(len(section.chords)),
            section.progression_id or "",
        )

    console.print(table)


def _show_chords_table(project):
    """Display every chord with its analysis."""
    table = Table(title=f"Chords ({project.key.name})")
    table.add_column("Section", style="cyan")
    table.add_column("Chord", style="green")
    table.add_column("Roman", style="yellow")
    table.add_column("Function", style="blue")
    table.add_column("Beats", style="magenta")

    for section in project.sections:
        for chord in section.chords:
            table.add_row(
                section.name,
                chord.name,
                chord.roman_numeral,
                chord.function.value,
                f"{chord.start_beat:g}+{chord.duration:g}",
            )

    console.print(table)


def _show_progressions_table(project):
    """Display detected progressions."""
    table = Table(title="Progressions")
    table.add_column("Id", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Chords", style="yellow")
    table.add_column("Used", style="magenta")
    table.add_column("Tags", style="blue")

    for progression in project.progressions:
        table.add_row(
            progression.id,
            progression.name,
            " ".join(c.name for c in progression.chords),
            str(progression.usage_count),
            ", ".join(progression.tags),
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
