"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ttfsampler.domain import DecodedGlyph

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def _format_point(point: tuple[float, float]) -> str:
    return f"({point[0]:.4g}, {point[1]:.4g})"


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]ttfsampler[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(
    font_path: str,
    tables: list[str],
    glyph_count: int,
    upm: int,
    long_loca: bool,
    segment_count: int,
) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        tables: Table tags present in the font
        glyph_count: maxp.numGlyphs
        upm: Units per em value
        long_loca: True when loca uses 32-bit offsets
        segment_count: Number of cmap format 4 segments
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(font_path)
    line.append(" (TrueType)")
    console.print(line)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")
    loca_format = "long" if long_loca else "short"
    console.print(f"  loca {loca_format} {SYM_DOT} {segment_count} cmap segments")
    console.print(f"  tables: {' '.join(tables)}")


def print_glyph_table(rows: list[tuple[str, int, DecodedGlyph | None]]) -> None:
    """Print one row per requested character.

    Args:
        rows: (character, glyph index, decoded glyph or None) per character
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("Char")
    table.add_column("Code")
    table.add_column("Glyph", justify="right")
    table.add_column("Paths", justify="right")
    table.add_column("Vertices")
    table.add_column("Inner")
    table.add_column("Bounds")

    for char, glyph_index, glyph in rows:
        code = f"U+{ord(char):04X}"
        if glyph is None:
            table.add_row(
                Text(repr(char)), code, str(glyph_index), "-", "-", "-", "[dim]missing[/dim]"
            )
            continue
        (min_x, min_y), (max_x, max_y) = glyph.bounds()
        table.add_row(
            Text(repr(char)),
            code,
            str(glyph_index),
            str(glyph.num_paths),
            " ".join(str(path.num_vertices) for path in glyph.paths),
            " ".join("y" if path.is_inner else "n" for path in glyph.paths),
            f"{_format_point((min_x, min_y))} {_format_point((max_x, max_y))}",
        )

    console.print(table)


def print_sampling(
    char: str,
    vertex_count: int,
    length: float,
    points: list[tuple[float, float]],
) -> None:
    """Print a sampled outline summary and its evaluated points.

    Args:
        char: Sampled character
        vertex_count: Number of vertices in the sampling
        length: Closed polyline length
        points: Points evaluated at evenly spaced arc-length fractions
    """
    console.print(
        f"  {char!r} {SYM_DOT} {vertex_count} vertices {SYM_DOT} length {length:.6g}"
    )
    for i, point in enumerate(points):
        console.print(f"  {i:>4}  {_format_point(point)}")


def print_success(message: str) -> None:
    """Print a success line."""
    console.print(f"\n[bold green]{SYM_OK}[/bold green] {message}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
