"""Command-line interface for SFC parsing and export.

This module provides the main CLI interface using Click for parsing SXF
(SFC) files, printing their levels and statistics and exporting the
placed geometry as JSON or DXF.
"""

import json
import logging
import traceback
from pathlib import Path

import click

from .config import ConfigurationHandler, ParserConfig
from .io import DxfExporter, JsonExporter, SFCReader
from .models import ParsedDocument
from .parser import SFCParser
from .process.transform import format_transform
from .protocols import IExporter


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command(name="parse")
@click.argument(
    "sfc_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="JSON configuration file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output JSON file path",
)
@click.option(
    "--dxf",
    type=click.Path(path_type=Path),
    help="Output DXF file path",
)
@click.option(
    "--batch-size",
    type=click.IntRange(min=0),
    default=None,
    help="Number of records interpreted per batch (0 = all at once)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show debug output and tracebacks",
)
def parse_sfc(
    sfc_file: Path,
    config: Path | None,
    output: Path | None,
    dxf: Path | None,
    batch_size: int | None,
    verbose: bool,
) -> None:
    """Parse an SFC file and print its levels and statistics.

    Arguments:
        SFC_FILE: Path to the SFC file to parse
    """
    _setup_logging(verbose)
    click.echo(f"Parsing SFC: {sfc_file.name}")
    try:
        parser_config = ParserConfig()
        if config is not None:
            if verbose:
                click.echo(f"Loading configuration from: {config.resolve().as_posix()}")
            parser_config = ConfigurationHandler(config).load_config()
        if batch_size is not None:
            parser_config.batch_size = batch_size

        def progress(processed: int, total: int) -> None:
            if verbose:
                click.echo(f"Interpreted {processed}/{total} records")

        reader = SFCReader(sfc_file, encodings=parser_config.encodings)
        document = SFCParser(parser_config).parse_source(reader, progress=progress)
        if verbose:
            click.echo(f"Decoded with: {reader.encoding}")
        _print_level_statistic(document)
        _print_type_statistic(document)

        if output is not None:
            json_exporter = JsonExporter(output)
            _export(json_exporter, document)
            click.echo(
                f"JSON written: {output} ({len(json_exporter.exported_levels)} levels, "
                f"{sum(json_exporter.exported_levels.values())} elements)"
            )
        if dxf is not None:
            dxf_exporter = DxfExporter(dxf, text_height=parser_config.dxf_text_height)
            _export(dxf_exporter, document)
            click.echo(f"DXF written: {dxf} ({sum(dxf_exporter.exported.values())} entities)")
            if dxf_exporter.not_exported:
                click.echo(f"Not exported elements: {len(dxf_exporter.not_exported)}")

    except Exception as e:
        message = f"Parsing failed: {e}"
        if verbose:
            message += "\n" + traceback.format_exc()
        raise click.ClickException(message) from e


def _export(exporter: IExporter, document: ParsedDocument) -> None:
    exporter.export_data(document)


def _print_level_statistic(document: ParsedDocument) -> None:
    header_line = f"{'No.':>4} {'Level':<30} {'Elements':>10}  {'Transform'}"
    header_length = len(header_line) + 50
    click.echo("\n" + "=" * header_length)
    click.echo("LEVELS")
    click.echo("=" * header_length)
    click.echo(header_line)
    click.echo("-" * header_length)
    for level in document.levels:
        element_count = len(document.elements_of(level))
        click.echo(f"{level.level_number:>4} {level.name:<30} {element_count:>10}  {format_transform(level.transform)}")
    click.echo("-" * header_length)


def _print_type_statistic(document: ParsedDocument) -> None:
    statistics = document.statistics
    header_line = f"{'Type':<35} {'Count':>10}"
    header_length = len(header_line)
    click.echo("\n" + "=" * header_length)
    click.echo("ELEMENT TYPE STATISTICS")
    click.echo("=" * header_length)
    click.echo(header_line)
    click.echo("-" * header_length)
    for type_name, count in sorted(statistics.element_type_counts.items()):
        click.echo(f"{type_name:<35} {count:>10}")
    click.echo("-" * header_length)
    click.echo(f"{'Total':<35} {statistics.total_elements:>10}")

    coord_range = statistics.coordinate_range
    if coord_range.is_empty:
        click.echo("Coordinate range: n/a")
    else:
        click.echo(
            f"Coordinate range: X({coord_range.min_x:.3f} ~ {coord_range.max_x:.3f}) "
            f"Y({coord_range.min_y:.3f} ~ {coord_range.max_y:.3f})"
        )


@click.group()
@click.version_option(package_name="sfcto")
def main() -> None:
    """SXF (SFC) parser for Japanese survey CAD data.

    This tool reads SFC files, groups their features into levels, applies
    the level transforms and exports the drawing as JSON or DXF.
    """
    pass


@main.command()
@click.argument("config_file", type=click.Path(path_type=Path))
def create_config(config_file: Path) -> None:
    """Create a sample configuration file.

    Parameters
    ----------
    config_file
        Path to the JSON configuration file
    """
    config = ParserConfig(batch_size=1000).to_dict()
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)

        click.echo(f"Sample configuration created: {config_file}")
        click.echo("Edit this file to match your SFC files.")

    except OSError as e:
        raise click.ClickException(f"Cannot create configuration file: {e}") from e


main.add_command(parse_sfc)


if __name__ == "__main__":
    main()
