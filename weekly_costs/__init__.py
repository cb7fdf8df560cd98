# SPDX-License-Identifier: MIT
# weekly_costs/__init__.py
from .fees import FeeSchedule, load_fee_schedule
from .matchups import resolve_losses
from .models import (
    ActivityTable,
    LeagueState,
    LossRecord,
    Matchup,
    Member,
    MissingRosterError,
    PeriodWindow,
    RosterActivity,
    SummaryRow,
    Transaction,
    build_members,
)
from .periods import default_period, max_period, selectable_periods, window_for
from .summary import build_summary
from .transactions import aggregate_transactions

__all__ = [
    "FeeSchedule",
    "load_fee_schedule",
    "resolve_losses",
    "aggregate_transactions",
    "build_summary",
    "window_for",
    "default_period",
    "max_period",
    "selectable_periods",
    "build_members",
    "ActivityTable",
    "LeagueState",
    "LossRecord",
    "Matchup",
    "Member",
    "MissingRosterError",
    "PeriodWindow",
    "RosterActivity",
    "SummaryRow",
    "Transaction",
]
