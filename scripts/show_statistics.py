#!/usr/bin/env python3
"""Print match-history statistics for one player from a directory of match-details JSON files."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from match_stats.config import load_statistics_configs
from match_stats.decoding import load_matches
from match_stats.pipeline import run_aggregators
from match_stats.registry import AggregatorDescriptor, get, get_all

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "statistics"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Match-history statistics commands.",
)


@app.command()
def summarize(
    player_id: Annotated[
        str,
        typer.Argument(help="Player UUID whose statistics to compute."),
    ],
    matches_dir: Annotated[
        Path,
        typer.Option(
            "--matches-dir",
            help="Directory of match-details JSON files.",
        ),
    ],
    config_dir: Annotated[
        Path,
        typer.Option(
            "--config-dir",
            help="Directory of statistics TOML configs.",
        ),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str,
        typer.Option(
            "--config-name",
            help="Config filename to use (for example: default.toml).",
        ),
    ] = "default.toml",
    aggregators: Annotated[
        list[str] | None,
        typer.Option(
            "--aggregator",
            help="Aggregator to run; repeat for several. Defaults to all registered aggregators.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log per-match progress."),
    ] = False,
) -> None:
    """Compute and print statistics for one player."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    configs = [config for config in load_statistics_configs(config_dir) if config.file_path.name == config_name]
    if not configs:
        raise typer.BadParameter(
            f"No config named '{config_name}' found in {config_dir}",
            param_hint="--config-name",
        )
    config = configs[0]

    descriptors: list[AggregatorDescriptor] = []
    for name in aggregators or []:
        try:
            descriptors.append(get(name))
        except KeyError as exc:
            raise typer.BadParameter(str(exc.args[0]), param_hint="--aggregator") from exc
    if not descriptors:
        descriptors = get_all()

    try:
        matches = load_matches(matches_dir)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--matches-dir") from exc

    typer.echo(
        f"loaded_matches={len(matches)} "
        f"matches_dir={matches_dir} "
        f"config={config.name} "
        f"aggregators={','.join(descriptor.name for descriptor in descriptors)}"
    )

    try:
        result = run_aggregators(
            player_id=player_id,
            matches=matches,
            config=config,
            descriptors=descriptors,
            echo=typer.echo,
        )
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    for descriptor in descriptors:
        typer.echo(f"[{descriptor.name}]")
        for line in descriptor.format_lines(result.summaries[descriptor.name]):
            typer.echo(f"  {line}")


@app.command()
def list_aggregators() -> None:
    """Print all registered aggregators."""
    descriptors = get_all()
    if not descriptors:
        typer.echo("no registered aggregators")
        return

    for descriptor in descriptors:
        typer.echo(f"{descriptor.name}: {descriptor.description}")


if __name__ == "__main__":
    app()
