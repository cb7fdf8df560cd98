# SPDX-License-Identifier: MIT
# weekly_costs/summary.py
from __future__ import annotations
from dataclasses import asdict
from typing import Iterable, List, Mapping, Set

import pandas as pd

from .fees import FeeSchedule
from .models import LossRecord, Member, RosterActivity, SummaryRow, roster_key


def _labels(member: Member) -> tuple[str, str]:
    if member.team_name:
        return member.team_name, member.display_name
    return member.display_name or f"Roster {member.roster_id}", ""


def build_summary(
    members: Iterable[Member],
    activity: Mapping,
    losses: Iterable[LossRecord],
    fees: FeeSchedule,
) -> List[SummaryRow]:
    """One cost row per member, in the order the members were given.

    Rosters that show up in activity or losses without a member are ignored.
    """
    losers: Set = {roster_key(loss.roster_id) for loss in losses}
    rows: List[SummaryRow] = []
    for m in members:
        rid = roster_key(m.roster_id)
        act = activity.get(rid) or RosterActivity(roster_id=rid)
        header, sub_label = _labels(m)
        adds_cost = act.adds * fees.add_fee
        trades_cost = act.trades * fees.trade_fee
        loss = 1 if rid in losers else 0
        loss_cost = loss * fees.loss_fee
        rows.append(
            SummaryRow(
                roster_id=m.roster_id,
                header=header,
                sub_label=sub_label,
                record=m.record,
                adds=act.adds,
                adds_cost=adds_cost,
                trades=act.trades,
                trades_cost=trades_cost,
                loss=loss,
                loss_cost=loss_cost,
                total_cost=adds_cost + trades_cost + loss_cost,
            )
        )
    return rows


def summary_frame(rows: Iterable[SummaryRow]) -> pd.DataFrame:
    """Rows as a flat DataFrame, one column per SummaryRow field (CSV export)."""
    columns = list(SummaryRow.__dataclass_fields__)
    return pd.DataFrame([asdict(r) for r in rows], columns=columns)


def display_frame(rows: Iterable[SummaryRow], fees: FeeSchedule) -> pd.DataFrame:
    """Console table: fee rates in the headers, "$cost (count)" cells."""
    df = summary_frame(rows)
    out = pd.DataFrame(
        {
            "Team": df["header"],
            "Owner": df["sub_label"],
            "Record": df["record"],
            f"Adds (${fees.add_fee}/ea)": [
                f"${c} ({n})" for c, n in zip(df["adds_cost"], df["adds"])
            ],
            f"Trades (${fees.trade_fee}/ea)": [
                f"${c} ({n})" for c, n in zip(df["trades_cost"], df["trades"])
            ],
            "Loss": [f"${c}" for c in df["loss_cost"]],
            "Total": [f"${c}" for c in df["total_cost"]],
        }
    )
    return out
