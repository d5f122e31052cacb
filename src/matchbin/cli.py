"""Matchbin CLI — typer entry point for trying selectors by hand."""

from __future__ import annotations

import random
from collections import Counter
from pathlib import Path
from typing import Annotated, Any, Optional

from dotenv import load_dotenv
import typer

# Load .env from cwd before anything reads env vars
load_dotenv(Path.cwd() / ".env")
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from matchbin.cache import CacheMissError
from matchbin.logging_utils import configure_logging
from matchbin.presets import get_preset, load_presets
from matchbin.selectors import BaseSelector, get_selector, list_selectors, make_config

app = typer.Typer(
    name="matchbin",
    help="Select the best-matching candidates from a set of scored uids.",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    log_level: Annotated[str, typer.Option("--log-level", envvar="MATCHBIN_LOG_LEVEL", help="Log level")] = "WARNING",
) -> None:
    try:
        configure_logging(log_level)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(1)


def parse_scores(pairs: list[str]) -> tuple[list[int], dict[int, float]]:
    """Parse ``UID=SCORE`` arguments; a uid may repeat but must keep one score."""
    uids: list[int] = []
    scores: dict[int, float] = {}
    for pair in pairs:
        uid_str, sep, score_str = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected UID=SCORE, got {pair!r}")
        uid, score = int(uid_str), float(score_str)
        if score < 0:
            raise ValueError(f"Scores must be non-negative, got {score} for uid {uid}")
        if uid in scores and scores[uid] != score:
            raise ValueError(f"uid {uid} given two different scores")
        uids.append(uid)
        scores[uid] = score
    return uids, scores


def _threshold(value: Optional[str]) -> float | None:
    if value is None or value.lower() in ("inf", "none"):
        return None
    return float(value)


# ── select ────────────────────────────────────────────────

@app.command()
def select(
    candidates: Annotated[list[str], typer.Argument(help="Scored candidates as UID=SCORE (lower is better)")],
    selector: Annotated[str, typer.Option("-s", "--selector", help="Selector name")] = "ranked",
    preset: Annotated[Optional[str], typer.Option("-P", "--preset", help="Named preset (overrides --selector and config flags)")] = None,
    n: Annotated[int, typer.Option("-n", help="Request size for the selection (0 = default)")] = 0,
    fetch: Annotated[Optional[int], typer.Option("-f", "--fetch", help="Results to fetch from the cache (defaults to -n)")] = None,
    threshold: Annotated[Optional[str], typer.Option(help="Maximum score to match ('inf' for none)")] = None,
    skew: Annotated[Optional[float], typer.Option(help="Roulette skew")] = None,
    b: Annotated[Optional[float], typer.Option(help="Exp-roulette base, in (0, 1)")] = None,
    c: Annotated[Optional[float], typer.Option(help="Exp-roulette score multiplier")] = None,
    z: Annotated[Optional[float], typer.Option(help="Exp-roulette exponent")] = None,
    max_baseline: Annotated[Optional[str], typer.Option("--max-baseline", help="Baseline ceiling ('inf' for none)")] = None,
    default_n: Annotated[Optional[int], typer.Option("--default-n", help="Result count used for n = 0")] = None,
    seed: Annotated[Optional[int], typer.Option(envvar="MATCHBIN_SEED", help="Random seed")] = None,
) -> None:
    """Run one selection and print the fetched uids."""
    rng = random.Random(seed)
    try:
        uids, scores = parse_scores(candidates)
        if preset is not None:
            sel = get_preset(preset).build(rng)
        else:
            overrides: dict[str, Any] = {}
            if threshold is not None:
                overrides["threshold"] = _threshold(threshold)
            if max_baseline is not None:
                overrides["max_baseline"] = _threshold(max_baseline)
            for key, value in (("skew", skew), ("b", b), ("c", c), ("z", z), ("default_n", default_n)):
                if value is not None:
                    overrides[key] = value
            sel = get_selector(selector, config=make_config(selector, **overrides), rng=rng)
        state = sel.select(uids, scores, n)
        matches = state.fetch(n if fetch is None else fetch)
    except CacheMissError as exc:
        console.print(f"[yellow]{escape(str(exc))}[/]")
        raise typer.Exit(1)
    except (ValueError, KeyError) as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(1)

    console.print(f"[bold green]{sel.describe()}[/]")
    if not matches:
        console.print("[yellow]No candidates within threshold.[/]")
        return
    _print_matches(sel, matches, scores)


def _print_matches(sel: BaseSelector, matches: list[int], scores: dict[int, float]) -> None:
    if sel.name == "ranked":
        table = Table(title=f"{len(matches)} match(es)")
        table.add_column("Rank", justify="right")
        table.add_column("UID", style="cyan")
        table.add_column("Score", justify="right", style="bold")
        for i, uid in enumerate(matches, 1):
            table.add_row(str(i), str(uid), f"{scores[uid]:.4f}")
        console.print(table)
        return

    console.print("Draws: " + " ".join(str(uid) for uid in matches))
    counts = Counter(matches)
    table = Table(title=f"{len(matches)} draw(s)")
    table.add_column("UID", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Draws", justify="right", style="bold")
    table.add_column("Share", justify="right")
    for uid, count in counts.most_common():
        table.add_row(str(uid), f"{scores[uid]:.4f}", str(count), f"{count / len(matches) * 100:.1f}%")
    console.print(table)


# ── list-selectors ───────────────────────────────────────

@app.command(name="list-selectors")
def list_selectors_cmd() -> None:
    """List available selectors with their default configuration."""
    table = Table(title="Selectors")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Defaults")
    for name, cls in sorted(list_selectors().items()):
        table.add_row(name, cls.description, cls().describe())
    console.print(table)


# ── list-presets ─────────────────────────────────────────

@app.command(name="list-presets")
def list_presets_cmd() -> None:
    """List available presets (builtins + user-defined)."""
    try:
        presets = load_presets()
    except (ValueError, KeyError) as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(1)

    table = Table(title="Presets")
    table.add_column("Name", style="cyan")
    table.add_column("Selector")
    for name, p in sorted(presets.items()):
        table.add_row(name, p.build().describe())
    console.print(table)
