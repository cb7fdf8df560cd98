# SPDX-License-Identifier: MIT
# weekly_costs/periods.py
from __future__ import annotations
from datetime import date, timedelta
from typing import List

from .models import LeagueState, PeriodWindow

TUESDAY = 1


def window_for(
    season_start: date, period: int, boundary_weekday: int = TUESDAY
) -> PeriodWindow:
    """Transaction-counting window for a scoring period.

    The window runs from the boundary weekday on/before the period's nominal
    date through the boundary weekday on/after it, both days included. Two
    consecutive windows therefore share their edge day.
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")
    if not 0 <= boundary_weekday <= 6:
        raise ValueError(f"boundary_weekday must be 0-6, got {boundary_weekday}")
    week_date = season_start + timedelta(weeks=period - 1)
    back = (week_date.weekday() - boundary_weekday) % 7
    ahead = (boundary_weekday - week_date.weekday()) % 7
    return PeriodWindow(
        start=week_date - timedelta(days=back),
        end=week_date + timedelta(days=ahead),
    )


def default_period(state: LeagueState) -> int:
    # outside the regular season the current leg is meaningless for costs
    return state.period if state.is_regular else 1


def max_period(state: LeagueState, weeks: int | None = None) -> int:
    if state.is_regular:
        return state.period
    return weeks if weeks is not None else state.weeks


def selectable_periods(state: LeagueState, weeks: int | None = None) -> List[int]:
    return list(range(1, max_period(state, weeks) + 1))
