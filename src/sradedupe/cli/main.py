"""Command-line interface for sradedupe.

Provides CLI commands for scanning reference collections.
"""

import importlib.metadata
import sys
import time
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("sradedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="sradedupe")
def cli() -> None:
    """Pairwise duplicate detection for bibliographic references.

    Use 'sradedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write duplicate pairs to this JSONL file",
)
@click.option(
    "--jaro-winkler-min",
    type=click.FloatRange(0.0, 1.0),
    default=0.9,
    show_default=True,
    help="Minimum Jaro-Winkler title similarity",
)
@click.option(
    "--levenshtein-max",
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help="Maximum Levenshtein title edit distance",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append structured JSONL audit events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def scan(
    input_path: str,
    output: str | None,
    jaro_winkler_min: float,
    levenshtein_max: int,
    log_file: str | None,
    verbose: bool,
) -> None:
    """Find duplicate pairs among the references in INPUT_PATH.

    INPUT_PATH is a JSONL file with one reference object per line
    (title, authors, year, pages, volume, number, isbn, doi, urls, rid).

    Examples
    --------
        sradedupe scan references.jsonl
        sradedupe scan references.jsonl -o dupes.jsonl --levenshtein-max 5
    """
    from sradedupe import DedupeConfig, find_duplicates, load_references, write_jsonl
    from sradedupe.audit import AuditLogger, generate_run_id
    from sradedupe.engine import StringDistances

    logger = AuditLogger(generate_run_id(), Path(log_file)) if log_file else None
    start = time.perf_counter()

    try:
        references = load_references(input_path)

        if verbose:
            click.echo(f"Loaded {len(references)} references from {input_path}", err=True)

        config = DedupeConfig(
            string_distances=StringDistances(
                jaro_winkler_min=jaro_winkler_min,
                levenshtein_max=levenshtein_max,
            )
        )

        if logger:
            logger.run_started(command=sys.argv, parameters=config.to_dict())

        pairs = find_duplicates(references, config=config, logger=logger)

        if verbose:
            for pair in pairs:
                click.echo(
                    f"  [{pair.index_a}, {pair.index_b}] {pair.result.reason}: "
                    f"{pair.ref_a.title!r} ~ {pair.ref_b.title!r}",
                    err=True,
                )

        if output:
            write_jsonl(pairs, output)

        if logger:
            logger.run_finished(
                status="success",
                duration_seconds=time.perf_counter() - start,
                records_processed=len(references),
            )

        destination = f" to {output}" if output else ""
        click.secho(
            f"✓ Found {len(pairs)} duplicate pair(s) among {len(references)} references"
            f"{destination}",
            fg="green",
        )

    except Exception as e:
        if logger:
            logger.run_finished(status="failed", duration_seconds=time.perf_counter() - start)
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    finally:
        if logger:
            logger.close()


if __name__ == "__main__":
    cli()
