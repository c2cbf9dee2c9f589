"""Command-line interface for chordscope.

Provides commands for:
- guess: Name the chord formed by a set of notes
- lookup: Look up a chord type by symbol, name or fingerprint
- pcset: Set-theory properties of a pitch-class set
- scale: Scale notes and diatonic chords
- progression: Chords of a scale-degree progression (optionally as MIDI)
- midi: Key and chord progression of a MIDI file
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="chordscope",
    help="Chord identification and music-theory toolkit",
    rich_markup_mode="markdown",
)
console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _parse_pitch(token: str):
    """MIDI numbers arrive as digit strings."""
    return int(token) if token.isdigit() else token


@app.command()
def guess(
    notes: List[str] = typer.Argument(..., help="Notes, bass first: names (C, Eb4) or MIDI numbers"),
    omissions: bool = typer.Option(
        True, "--omissions/--no-omissions", help="Accept chords with omitted tones"
    ),
    inversions: bool = typer.Option(
        True, "--inversions/--no-inversions", help="Accept inverted chords"
    ),
    slash: bool = typer.Option(
        True, "--slash/--no-slash", help="Accept a bass other than the root"
    ),
    top: int = typer.Option(5, "-n", "--top", help="Number of guesses to show (0 = all)"),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Guess the chord formed by a set of notes.

    **Examples:**

        chordscope guess C E G B

        chordscope guess E G C --no-inversions

        chordscope guess 52 60 64 67 --json
    """
    from .inference import Chord, GuessOptions

    options = GuessOptions(
        allow_omissions=omissions,
        allow_inversions=inversions,
        allow_slash=slash,
    )
    try:
        results = Chord.guess([_parse_pitch(n) for n in notes], options)
    except (TypeError, ValueError) as e:
        _fail(str(e))

    if top > 0:
        results = results[:top]

    if json_output:
        console.print_json(data={
            "notes": notes,
            "guesses": [
                {
                    "symbol": str(r.chord),
                    "name": r.chord.name,
                    "inversion": r.chord.inversion,
                    "weight": r.weight,
                    "chord": r.chord.to_dict(),
                }
                for r in results
            ],
        })
        return

    if not results:
        console.print("[yellow]No chord recognized[/yellow]")
        return

    _show_guesses_table(results)


@app.command()
def lookup(
    key: str = typer.Argument(..., help="Chord symbol (maj7), name (major seventh) or fingerprint (2193)"),
    search: bool = typer.Option(
        False, "-s", "--search", help="Show every chord type matching the key"
    ),
):
    """Look up a chord type.

    **Examples:**

        chordscope lookup maj7

        chordscope lookup "dominant seventh"

        chordscope lookup 145 --search
    """
    from .inference import get_chord_type_index

    index = get_chord_type_index()
    query = int(key) if key.isdigit() else key

    if search:
        matches = index.search(query)
    else:
        found = index.find(query)
        matches = [found] if found is not None else []

    if not matches:
        _fail(f"No chord type found for: {key}")

    table = Table(title=f"Chord types: {key}")
    table.add_column("Name", style="cyan")
    table.add_column("Symbols", style="green")
    table.add_column("Intervals", style="yellow")
    table.add_column("Binary", style="magenta")
    table.add_column("Omits", style="blue")

    for chord_type in matches:
        table.add_row(
            chord_type.name or "-",
            " ".join(s or "(none)" for s in chord_type.symbols),
            " ".join(i.name for i in chord_type.intervals),
            str(chord_type.binary),
            " ".join(i.name for i in chord_type.omission) if chord_type.omission else "-",
        )

    console.print(table)


@app.command()
def pcset(
    pitches: List[str] = typer.Argument(..., help="Chromas (0-11) or pitch class names"),
    compare: Optional[str] = typer.Option(
        None, "-c", "--compare", help="Comma-separated set to test for Z-relation, e.g. 0,1,3,7"
    ),
):
    """Show set-theory properties of a pitch-class set.

    **Examples:**

        chordscope pcset 0 4 7

        chordscope pcset C E G Bb

        chordscope pcset 0 1 4 6 --compare 0,1,3,7
    """
    from .core import PitchClassSet

    try:
        pcs = PitchClassSet.from_pitches(_parse_pitch(p) for p in pitches)
        other = None
        if compare:
            other = PitchClassSet.from_pitches(
                _parse_pitch(p.strip()) for p in compare.split(",") if p.strip()
            )
    except (TypeError, ValueError) as e:
        _fail(str(e))

    console.print(f"\n[bold]Pitch-class set:[/bold] {list(pcs)}")
    console.print(f"  Binary: {pcs.binary} ({pcs})")
    console.print(f"  Normal form: {list(pcs.normal())}")
    console.print(f"  Prime form: {list(pcs.prime())}")
    console.print(f"  Interval vector: {list(pcs.interval_vector)}")
    console.print(f"  Complement: {list(pcs.complement())}")

    if other is not None:
        related = PitchClassSet.is_z_related(pcs, other)
        same_prime = pcs.prime() == other.prime()
        if related and not same_prime:
            verdict = "[green]Z-related[/green]"
        elif same_prime:
            verdict = "[yellow]same set class[/yellow]"
        else:
            verdict = "[red]not Z-related[/red]"
        console.print(f"  Compared with {list(other)}: {verdict}")


@app.command()
def scale(
    root: str = typer.Argument(..., help="Scale root, e.g. C, F#, Bb"),
    mode: str = typer.Argument("major", help="Mode name, e.g. major, dorian, harmonic_minor"),
    sevenths: bool = typer.Option(
        False, "--sevenths", help="Show seventh chords instead of triads"
    ),
):
    """Show the notes and diatonic chords of a scale.

    **Examples:**

        chordscope scale C major

        chordscope scale D dorian --sevenths
    """
    from .inference import Key, Scale

    try:
        selected = Scale.from_mode(root, mode)
    except (TypeError, ValueError) as e:
        _fail(str(e))

    key = Key(selected.root, mode) if mode in ("major", "minor") else None
    chords = selected.diatonic_sevenths() if sevenths else selected.diatonic_chords()

    console.print(f"\n[bold]{selected.name}[/bold]: {' '.join(n.name for n in selected.notes)}")

    table = Table(title="Diatonic chords")
    table.add_column("Degree", style="cyan")
    table.add_column("Chord", style="green")
    table.add_column("Roman", style="yellow")

    for degree, chord in chords:
        table.add_row(
            str(degree),
            str(chord) if chord else "-",
            key.roman_numeral(chord) if key and chord else "-",
        )

    console.print(table)


@app.command()
def progression(
    root: str = typer.Argument(..., help="Scale root, e.g. C"),
    mode: str = typer.Argument(..., help="Mode name, e.g. major"),
    degrees: List[str] = typer.Argument(
        ..., help="Scale degrees (2 5 1) or a common progression name (ii-V-I)"
    ),
    sevenths: bool = typer.Option(
        False, "--sevenths", help="Use seventh chords instead of triads"
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the progression to a MIDI file"
    ),
    tempo: float = typer.Option(120.0, "-t", "--tempo", help="Tempo for MIDI export (BPM)"),
):
    """Build the chords of a scale-degree progression.

    **Examples:**

        chordscope progression C major 2 5 1

        chordscope progression A minor i-bVI-bIII-bVII -o axis.mid
    """
    from .inference import COMMON_PROGRESSIONS, Scale, progression_from_degrees
    from .output import MIDIExporter

    try:
        if len(degrees) == 1 and degrees[0] in COMMON_PROGRESSIONS:
            steps = list(COMMON_PROGRESSIONS[degrees[0]])
        else:
            steps = [int(d) for d in degrees]
        selected = Scale.from_mode(root, mode)
        chords = progression_from_degrees(selected, steps, sevenths=sevenths)
    except (TypeError, ValueError) as e:
        _fail(str(e))

    console.print(f"[bold]{selected.name}[/bold]: {' - '.join(str(c) for c in chords)}")

    if output is not None:
        MIDIExporter(tempo=tempo).export_chords(chords, str(output))
        console.print(f"[green]Exported to:[/green] {output}")


@app.command()
def midi(
    input_file: Path = typer.Argument(..., help="Input MIDI file"),
    key: Optional[str] = typer.Option(
        None, "-k", "--key", help="Key to analyze in (e.g. C, Am). Default: detect"
    ),
    min_duration: float = typer.Option(
        0.25, "--min-duration", help="Minimum chord duration in seconds"
    ),
    drums: bool = typer.Option(False, "--drums", help="Include percussion tracks"),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Detect the key and chord progression of a MIDI file.

    **Examples:**

        chordscope midi song.mid

        chordscope midi song.mid --key Am --json
    """
    from .input import MidiLoader
    from .inference import ChordAnalyzer, KeyDetector, resolve_key

    if not input_file.exists():
        _fail(f"File not found: {input_file}")

    try:
        notes = MidiLoader(include_drums=drums).load(str(input_file))
        selected_key = resolve_key(key)
    except (TypeError, ValueError) as e:
        _fail(str(e))

    if not notes:
        console.print("[yellow]No notes found![/yellow]")
        raise typer.Exit(1)

    key_info = None
    if selected_key is None:
        key_info = KeyDetector().analyze(notes)
        selected_key = key_info.key

    analyzer = ChordAnalyzer(min_chord_duration=min_duration)
    result = analyzer.analyze(notes, selected_key)
    cadences = analyzer.identify_cadences(result)

    if json_output:
        data = {
            "input": str(input_file),
            "notes_count": len(notes),
            "key": selected_key.name,
            "chords": [
                {
                    "symbol": s.symbol,
                    "roman": roman,
                    "onset": s.onset,
                    "offset": s.offset,
                    "confidence": s.confidence,
                }
                for s, roman in zip(result.segments, result.roman_numerals)
            ],
            "cadences": [{"index": i, "type": kind} for i, kind in cadences],
            "progressions": [name for name, _ in result.get_common_progressions()],
        }
        if key_info is not None:
            data["key_confidence"] = key_info.confidence
            data["key_ambiguity"] = key_info.ambiguity_score
        console.print_json(data=data)
        return

    console.print(f"\n[bold blue]MIDI Analysis: {input_file.name}[/bold blue]\n")
    console.print(f"   Notes: {len(notes)}")
    console.print(f"   [green]Key: {selected_key.name}[/green]")
    if key_info is not None:
        console.print(f"   Confidence: {key_info.confidence:.2f}")
        console.print(f"   Ambiguity: {key_info.ambiguity_score:.2f}")

    if not result.segments:
        console.print("[yellow]No chords detected[/yellow]")
        return

    _show_chords_table(result)
    console.print(f"\n   [green]Progression: {' - '.join(result.roman_numerals)}[/green]")
    for index, kind in cadences:
        console.print(f"   Cadence ({kind}) at chord {index + 1}")
    for name, coverage in result.get_common_progressions():
        console.print(f"   Contains {name} ({coverage:.0%} of the progression)")


def _show_guesses_table(results):
    """Display chord guesses in a table."""
    table = Table(title="Chord Guesses")
    table.add_column("Chord", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Inversion", style="yellow")
    table.add_column("Weight", style="magenta")

    for result in results:
        inversion = result.chord.inversion
        table.add_row(
            str(result.chord),
            result.chord.name,
            "-" if inversion is None else str(inversion),
            f"{result.weight:.2f}",
        )

    console.print(table)


def _show_chords_table(progression):
    """Display detected chords in a table."""
    table = Table(title="Detected Chords")
    table.add_column("Chord", style="cyan")
    table.add_column("Roman", style="green")
    table.add_column("Time", style="yellow")
    table.add_column("Confidence", style="magenta")

    for segment, roman in zip(progression.segments, progression.roman_numerals):
        table.add_row(
            segment.symbol,
            roman,
            f"{segment.onset:.2f}-{segment.offset:.2f}s",
            f"{segment.confidence:.2f}",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
