"""Activity CLI — simulate event streams and combine saved counters."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

import click

from activity import __version__
from activity.config import (
    DEFAULT_CONFIG,
    ActivityConfigError,
    get_activity_config,
    read_config,
)
from activity.counter import Counter, add
from activity.durations import format_duration

logging.basicConfig(level=logging.WARNING)


class ActivityError(click.ClickException):
    """General activity CLI error (exit code 1)."""

    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)


def _load_counter(path: Path) -> Counter:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Counter.from_dict(data)
    except json.JSONDecodeError as e:
        raise ActivityError(f"Corrupt counter file {path}: {e}")
    except (KeyError, TypeError, ValueError) as e:
        raise ActivityError(f"Invalid counter in {path}: {e}")


def _summary(counter: Counter, now: float) -> dict[str, Any]:
    return {
        **counter.to_dict(),
        "hz": counter.hz(),
        "next_expected": counter.next_expected(now),
        "display": str(counter),
    }


def _strict_json(info: dict[str, Any]) -> dict[str, Any]:
    """Replace inf/nan numbers with None so the output is standard JSON."""
    return {
        k: None if isinstance(v, float) and not math.isfinite(v) else v
        for k, v in info.items()
    }


def _echo(counter: Counter, now: float, as_json: bool) -> None:
    info = _summary(counter, now)
    if as_json:
        click.echo(json.dumps(_strict_json(info), indent=2, ensure_ascii=False, allow_nan=False))
        return
    click.echo(f"value:         {info['value']:.6g}")
    click.echo(f"hz:            {info['hz']:.6g}")
    click.echo(f"next expected: {format_duration(info['next_expected'])}")
    click.echo(f"display:       {info['display']}")


@click.group()
@click.version_option(version=__version__, prog_name="activity")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Decaying activity counter — estimate recent event rates."""
    if verbose:
        logging.getLogger("activity").setLevel(logging.DEBUG)


@cli.command()
@click.option("--tau", type=float, default=None, help="Characteristic time in seconds.")
@click.option("--rate", type=float, default=1.0, show_default=True, help="Event rate in Hz.")
@click.option("--events", type=int, default=1000, show_default=True, help="Number of events.")
@click.option("--poisson", is_flag=True, help="Random Poisson arrivals instead of a steady tick.")
@click.option("--seed", type=int, default=None, help="Random seed for --poisson.")
@click.option(
    "--config", "config_path", type=click.Path(path_type=Path), default=None,
    help="JSON config file providing activity.tau_seconds.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON (infinite or NaN numbers become null).")
def simulate(
    tau: float | None,
    rate: float,
    events: int,
    poisson: bool,
    seed: int | None,
    config_path: Path | None,
    as_json: bool,
) -> None:
    """Feed a synthetic event stream into a fresh counter and report it."""
    from activity.streams import feed, periodic_arrivals, poisson_arrivals

    if tau is None:
        try:
            config = read_config(config_path) if config_path else DEFAULT_CONFIG
            tau = get_activity_config(config)
        except (FileNotFoundError, ActivityConfigError) as e:
            raise ActivityError(str(e))
    if tau <= 0:
        raise ActivityError("--tau must be positive.")
    if events < 1:
        raise ActivityError("--events must be at least 1.")

    try:
        if poisson:
            stamps = poisson_arrivals(rate, events, seed=seed)
        else:
            stamps = periodic_arrivals(rate, events)
    except ValueError as e:
        raise ActivityError(str(e))

    counter = feed(Counter(tau=tau), stamps)
    _echo(counter, stamps[-1], as_json)


@cli.command()
@click.argument("first", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("second", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--now", type=float, default=None, help="Reference time for next expected (default: merged timestamp).")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON (infinite or NaN numbers become null).")
def merge(first: Path, second: Path, now: float | None, as_json: bool) -> None:
    """Combine two counters saved as JSON into one."""
    merged = add(_load_counter(first), _load_counter(second))
    _echo(merged, merged.timestamp if now is None else now, as_json)
