# SPDX-License-Identifier: MIT
# weekly_costs/transactions.py
from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from .models import (
    COMPLETE,
    FREE_AGENT,
    TRADE,
    WAIVER,
    ActivityTable,
    PeriodWindow,
    RosterActivity,
    Transaction,
    roster_key,
)

ADD_TYPES = {WAIVER, FREE_AGENT}


def _zone(name: str):
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def transaction_day(status_updated: int, tz: str = "UTC") -> date:
    """Calendar day of a Sleeper epoch-ms timestamp in the league's timezone."""
    return datetime.fromtimestamp(status_updated / 1000, tz=_zone(tz)).date()


def counts_toward(
    txn: Transaction, window: Optional[PeriodWindow] = None, tz: str = "UTC"
) -> bool:
    if txn.status != COMPLETE or not txn.adds:
        return False
    if txn.type not in ADD_TYPES and txn.type != TRADE:
        return False
    if window is None:
        return True
    if txn.status_updated is None:
        return False
    return window.contains(transaction_day(txn.status_updated, tz))


def aggregate_transactions(
    transactions: Iterable[Transaction],
    window: Optional[PeriodWindow] = None,
    tz: str = "UTC",
) -> ActivityTable:
    """Tally completed adds and trades per roster.

    Every (player, roster) pair in a transaction's adds map counts once, so a
    multi-player trade credits each receiving roster per player received.
    Incomplete transactions, empty adds and unrecognised types are skipped.
    """
    table = ActivityTable()
    for txn in transactions:
        if not counts_toward(txn, window, tz):
            continue
        for rid in txn.adds.values():
            roster_id = roster_key(rid)
            act = table.get(roster_id)
            if act is None:
                act = table[roster_id] = RosterActivity(roster_id=roster_id)
            if txn.type == TRADE:
                act.trades += 1
            else:
                act.adds += 1
    return table
