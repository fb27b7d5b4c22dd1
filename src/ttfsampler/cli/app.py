"""CLI application entry point for ttfsampler.

This module provides the command-line interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from ttfsampler import __version__
from ttfsampler.cli.output import (
    console,
    print_error,
    print_font_info,
    print_glyph_table,
    print_header,
    print_sampling,
)
from ttfsampler.config import (
    CmapConfig,
    CmapLookup,
    LoggingConfig,
    SamplerSettings,
    SamplingConfig,
    ScaleConfig,
)
from ttfsampler.exceptions import TtfSamplerError
from ttfsampler.io import FontReader, load
from ttfsampler.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="ttfsampler",
    help="Decode TrueType glyph outlines and sample them by arc length.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]ttfsampler[/bold blue] v{__version__}")
        raise typer.Exit()


FontArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to input TTF font file",
        show_default=False,
    ),
]
SizeOption = Annotated[
    float,
    typer.Option(
        "--size",
        "-s",
        help="Scale applied to em-normalized coordinates",
        min=1e-6,
    ),
]
LookupOption = Annotated[
    CmapLookup,
    typer.Option(
        "--lookup",
        help="cmap segment scan rule (legacy|standard)",
    ),
]


@app.callback()
def main_callback(
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Decode TrueType glyph outlines and sample them by arc length."""
    config = LoggingConfig(log_file=log_file, log_level=log_level)
    configure_logging(
        log_file=config.log_file,
        console_level=config.log_level,
        file_level=config.file_log_level,
    )


def _open(font: Path, settings: SamplerSettings) -> FontReader:
    if not font.exists():
        print_error(
            f"Input file not found: {font}",
            details=f"The file '{font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    try:
        return load(font, settings)
    except TtfSamplerError as e:
        print_error(f"Could not load font: {e}")
        raise typer.Exit(code=1) from e


@app.command()
def info(font: FontArgument) -> None:
    """Show the tables and metadata of a font."""
    with _open(font, SamplerSettings()) as reader:
        print_header(__version__)
        print_font_info(
            font_path=str(font),
            tables=sorted(reader.tables),
            glyph_count=reader.glyph_count,
            upm=reader.units_per_em,
            long_loca=reader.head.long_loca,
            segment_count=reader.cmap.seg_count,
        )


@app.command()
def glyph(
    font: FontArgument,
    chars: Annotated[
        str,
        typer.Argument(
            help="Characters to decode",
            show_default=False,
        ),
    ],
    size: SizeOption = 1.0,
    lookup: LookupOption = CmapLookup.LEGACY,
) -> None:
    """Decode characters and list their paths.

    Example:
        ttfsampler glyph DejaVuSans.ttf ABO
    """
    settings = SamplerSettings(
        scale=ScaleConfig(font_size=size),
        cmap=CmapConfig(lookup=lookup),
    )
    with _open(font, settings) as reader:
        rows = [
            (char, reader.map_char(ord(char)), reader.get_glyph(ord(char))) for char in chars
        ]
    print_glyph_table(rows)


@app.command()
def sample(
    font: FontArgument,
    char: Annotated[
        str,
        typer.Argument(
            help="Single character to sample",
            show_default=False,
        ),
    ],
    subsamples: Annotated[
        int,
        typer.Option(
            "--subsamples",
            "-n",
            help="Samples per curve span",
            min=1,
            max=256,
        ),
    ] = 4,
    segments: Annotated[
        bool,
        typer.Option(
            "--segments",
            help="Also subdivide straight spans",
        ),
    ] = False,
    points: Annotated[
        int | None,
        typer.Option(
            "--points",
            "-p",
            help="Number of evenly spaced points to evaluate [default: 64]",
            min=1,
        ),
    ] = None,
    size: SizeOption = 1.0,
    lookup: LookupOption = CmapLookup.LEGACY,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the sampling as JSON",
        ),
    ] = False,
) -> None:
    """Sample the first outer path of a character by arc length.

    Example:
        ttfsampler sample DejaVuSans.ttf O --subsamples 8 --points 32
    """
    if len(char) != 1:
        print_error(f"Expected a single character, got {char!r}")
        raise typer.Exit(code=1)

    settings = SamplerSettings(
        scale=ScaleConfig(font_size=size),
        sampling=SamplingConfig(subsamples=subsamples, enable_segment_sampling=segments),
        cmap=CmapConfig(lookup=lookup),
    )
    with _open(font, settings) as reader:
        decoded = reader.get_glyph(ord(char))
        outer = decoded.outer_path if decoded is not None else None
        if outer is None:
            print_error(f"No outline for {char!r} (U+{ord(char):04X})")
            raise typer.Exit(code=1)

        sampling = reader.sample_path(outer)
        polyline = reader.contour_polyline(sampling, points)[:-1]

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "char": char,
                    "codepoint": ord(char),
                    "glyph_index": decoded.glyph_index,
                    "vertices": len(sampling),
                    "length": sampling.length(),
                    "points": [list(p) for p in polyline],
                }
            )
        )
        return

    print_sampling(char, len(sampling), sampling.length(), polyline)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
