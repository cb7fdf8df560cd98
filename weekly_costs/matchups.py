# SPDX-License-Identifier: MIT
# weekly_costs/matchups.py
from __future__ import annotations
from typing import Dict, Iterable, Set

from .models import LossRecord, Matchup


def resolve_losses(matchups: Iterable[Matchup]) -> Set[LossRecord]:
    """Return the losing roster of every matchup group in a period.

    Groups are folded in input order, carrying the lowest score seen so far.
    An equal score anywhere in a group marks it as tied and the group yields
    no loss, even when a later roster scores lower. Two rosters per
    matchup_id is the normal case; a larger group without ties loses its
    lowest scorer.
    """
    low: Dict[int, LossRecord] = {}
    tied: Set[int] = set()
    for m in matchups:
        if m.matchup_id in tied:
            continue
        prev = low.get(m.matchup_id)
        if prev is None:
            low[m.matchup_id] = LossRecord(roster_id=m.roster_id, points=m.points)
        elif prev.points == m.points:
            del low[m.matchup_id]
            tied.add(m.matchup_id)
        elif m.points < prev.points:
            low[m.matchup_id] = LossRecord(roster_id=m.roster_id, points=m.points)
    return set(low.values())
