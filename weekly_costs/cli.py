# SPDX-License-Identifier: MIT
# weekly_costs/cli.py
from __future__ import annotations
import os
import csv
from dataclasses import dataclass
from datetime import datetime
from typing import List, Set

import typer
from dotenv import load_dotenv, find_dotenv

from .fees import WEEKDAYS, FeeSchedule, load_fee_schedule
from .matchups import resolve_losses
from .models import ActivityTable, LossRecord, PeriodWindow, SummaryRow
from .periods import default_period, max_period, selectable_periods, window_for
from .sleeper import LeagueSnapshot, SleeperClient, fetch_snapshot, fetch_state
from .summary import build_summary, display_frame, summary_frame
from .transactions import aggregate_transactions, counts_toward

load_dotenv(find_dotenv(), override=False)

app = typer.Typer(add_completion=False, help="Sleeper league weekly costs summary")


@dataclass
class PeriodReport:
    period: int
    window: PeriodWindow | None
    losses: Set[LossRecord]
    activity: ActivityTable
    rows: List[SummaryRow]
    skipped: int


def _resolve_league(league: str | None) -> str:
    league_id = league or os.getenv("LEAGUE")
    if not league_id:
        typer.echo("❌ Missing league id. Pass --league or set $LEAGUE in .env")
        raise typer.Exit(1)
    return league_id


def _load_fees(fees_path: str | None) -> FeeSchedule:
    try:
        return load_fee_schedule(fees_path)
    except ValueError as e:
        typer.echo(f"❌ Fee config invalid: {e}")
        raise typer.Exit(1)


def _report(
    snapshot: LeagueSnapshot, fees: FeeSchedule, use_window: bool = True
) -> PeriodReport:
    window = None
    transactions = snapshot.transactions
    if use_window and snapshot.state.season_start is not None:
        window = window_for(
            snapshot.state.season_start,
            snapshot.period,
            fees.boundary_weekday_index,
        )
    else:
        # no date window: count only what Sleeper files under this leg
        transactions = [
            t for t in transactions if t.leg is None or t.leg == snapshot.period
        ]

    losses = resolve_losses(snapshot.matchups)
    activity = aggregate_transactions(transactions, window, tz=fees.timezone)
    rows = build_summary(snapshot.members, activity, losses, fees)
    skipped = sum(
        1 for t in transactions if not counts_toward(t, window, fees.timezone)
    )
    return PeriodReport(
        period=snapshot.period,
        window=window,
        losses=losses,
        activity=activity,
        rows=rows,
        skipped=skipped,
    )


def _summary(
    league_id: str,
    fees: FeeSchedule,
    period: int | None,
    use_window: bool,
    client: SleeperClient | None = None,
) -> tuple[LeagueSnapshot, PeriodReport]:
    snapshot = fetch_snapshot(
        client or SleeperClient(),
        league_id,
        fees,
        period=period,
        with_previous=use_window,
    )
    return snapshot, _report(snapshot, fees, use_window=use_window)


@app.command("summary")
def cmd_summary(
    league: str = typer.Option(None, help="Sleeper league id (defaults to $LEAGUE)"),
    period: int = typer.Option(
        None, help="Scoring period (default: current leg in the regular season)"
    ),
    fees: str = typer.Option(None, help="Fee schedule YAML (defaults to $FEES_FILE)"),
    out: str = typer.Option(None, help="Also write the summary to this CSV path"),
    window: bool = typer.Option(
        True, help="Count transactions by boundary-day date window"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show window details"),
):
    """Weekly costs per roster: adds, trades and matchup loss."""
    league_id = _resolve_league(league)
    schedule = _load_fees(fees)

    try:
        snapshot, report = _summary(league_id, schedule, period, window)
    except Exception as e:
        typer.echo(f"❌ Summary failed: {e}")
        raise typer.Exit(1)

    name = snapshot.league.get("name") or league_id
    typer.echo(f"📊 {name}: weekly costs for period {report.period}")
    if verbose:
        if report.window is not None:
            typer.echo(
                f"   window {report.window.start.isoformat()} .. "
                f"{report.window.end.isoformat()} ({schedule.timezone})"
            )
        else:
            typer.echo("   no date window, counting this leg's transactions only")
        typer.echo(
            f"   transactions: {len(snapshot.transactions)} fetched, "
            f"{report.skipped} skipped"
        )
    if not report.rows:
        typer.echo("⚠️  No members found for this league")
        return

    typer.echo(display_frame(report.rows, schedule).to_string(index=False))
    typer.echo(
        "⚠️  Loss reflects the matchup's current state; "
        "check back after the week ends."
    )

    if out:
        os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
        summary_frame(report.rows).to_csv(out, index=False, quoting=csv.QUOTE_MINIMAL)
        typer.echo(f"✅ Wrote {out}")


@app.command("losses")
def cmd_losses(
    league: str = typer.Option(None, help="Sleeper league id (defaults to $LEAGUE)"),
    period: int = typer.Option(None, help="Scoring period"),
    fees: str = typer.Option(None, help="Fee schedule YAML (defaults to $FEES_FILE)"),
):
    """List the roster that lost each matchup in a period."""
    league_id = _resolve_league(league)
    schedule = _load_fees(fees)

    try:
        snapshot, report = _summary(league_id, schedule, period, use_window=False)
    except Exception as e:
        typer.echo(f"❌ Loss lookup failed: {e}")
        raise typer.Exit(1)

    labels = {r.roster_id: r.header for r in report.rows}
    if not report.losses:
        typer.echo(f"No losses recorded for period {report.period}")
        return
    typer.echo(f"Period {report.period} losses (${schedule.loss_fee} each):")
    for loss in sorted(report.losses, key=lambda x: x.roster_id):
        label = labels.get(loss.roster_id, f"Roster {loss.roster_id}")
        typer.echo(f"  {label}: {loss.points:.2f}")


@app.command("window")
def cmd_window(
    start: str = typer.Option(..., help="Season start date, YYYY-MM-DD"),
    period: int = typer.Option(..., help="Scoring period (1-based)"),
    boundary: str = typer.Option("tuesday", help="Boundary weekday"),
):
    """Show the transaction date window for a period (offline)."""
    day = boundary.strip().lower()
    if day not in WEEKDAYS:
        typer.echo(f"❌ Unknown weekday: {boundary}")
        raise typer.Exit(1)
    try:
        season_start = datetime.strptime(start, "%Y-%m-%d").date()
        w = window_for(season_start, period, WEEKDAYS[day])
    except ValueError as e:
        typer.echo(f"❌ Window failed: {e}")
        raise typer.Exit(1)
    typer.echo(f"{w.start.isoformat()} {w.end.isoformat()}")


@app.command("periods")
def cmd_periods(
    fees: str = typer.Option(None, help="Fee schedule YAML (defaults to $FEES_FILE)"),
):
    """Show which scoring periods can be summarised right now."""
    schedule = _load_fees(fees)
    try:
        state = fetch_state(SleeperClient(), schedule)
    except Exception as e:
        typer.echo(f"❌ State lookup failed: {e}")
        raise typer.Exit(1)

    typer.echo(f"Season {state.season or '?'} ({state.season_type or 'unknown'})")
    typer.echo(f"Default period: {default_period(state)}")
    periods = selectable_periods(state)
    typer.echo(f"Selectable: 1-{max_period(state)} ({len(periods)} periods)")


if __name__ == "__main__":
    app()
