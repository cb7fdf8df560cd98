# SPDX-License-Identifier: MIT
# weekly_costs/models.py
from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

TRADE = "trade"
WAIVER = "waiver"
FREE_AGENT = "free_agent"
COMPLETE = "complete"


class MissingRosterError(ValueError):
    """A league user has no roster; the member list would be incomplete."""


def _f(x, default=0.0):
    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        return float(x)
    except Exception:
        return default


def roster_key(x):
    """Sleeper sends roster ids as ints, but adds maps sometimes carry strings."""
    try:
        return int(x)
    except (TypeError, ValueError):
        return x


@dataclass(frozen=True)
class Member:
    user_id: str
    roster_id: int
    display_name: str
    team_name: str | None = None
    avatar: str | None = None
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}-{self.ties}"


@dataclass(frozen=True)
class Matchup:
    matchup_id: int
    roster_id: int
    points: float


@dataclass(frozen=True)
class LossRecord:
    roster_id: int
    points: float


@dataclass(frozen=True)
class Transaction:
    type: str
    status: str
    adds: Dict[str, Any] | None = None
    status_updated: int | None = None  # epoch ms
    transaction_id: str | None = None
    leg: int | None = None


@dataclass
class RosterActivity:
    roster_id: Any
    adds: int = 0
    trades: int = 0


class ActivityTable(dict):
    """roster_id -> RosterActivity; reads of unknown rosters come back zeroed."""

    def __missing__(self, roster_id) -> RosterActivity:
        key = roster_key(roster_id)
        if key != roster_id and key in self:
            return self[key]
        return RosterActivity(roster_id=key)


@dataclass(frozen=True)
class SummaryRow:
    roster_id: int
    header: str
    sub_label: str
    record: str
    adds: int
    adds_cost: int
    trades: int
    trades_cost: int
    loss: int
    loss_cost: int
    total_cost: int


@dataclass(frozen=True)
class PeriodWindow:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class LeagueState:
    period: int
    season_start: date | None
    season_type: str
    weeks: int
    season: str | None = None

    @property
    def is_regular(self) -> bool:
        return self.season_type == "regular"

    @classmethod
    def from_sleeper(cls, raw: Dict[str, Any], weeks: int) -> "LeagueState":
        # Sleeper's /state/nfl: "leg" is the scoring period, "week" the NFL week
        period = raw.get("leg") or raw.get("week") or 1
        start = raw.get("season_start_date")
        season_start = None
        if start:
            try:
                season_start = datetime.strptime(str(start), "%Y-%m-%d").date()
            except ValueError:
                season_start = None
        return cls(
            period=int(period),
            season_start=season_start,
            season_type=str(raw.get("season_type") or ""),
            weeks=weeks,
            season=raw.get("season"),
        )


def build_members(
    users: Iterable[Dict[str, Any]], rosters: Iterable[Dict[str, Any]]
) -> List[Member]:
    """Join league users to their rosters, sorted by roster_id.

    Every user must own a roster. Rosters without an owner (orphans) are not
    members and are left out.
    """
    by_owner = {}
    for r in rosters:
        owner = r.get("owner_id")
        if owner is not None:
            by_owner.setdefault(owner, r)

    members: List[Member] = []
    for u in users:
        user_id = u.get("user_id")
        roster = by_owner.get(user_id)
        if roster is None:
            raise MissingRosterError(
                f"User {u.get('display_name') or user_id} has no roster in this league"
            )
        settings = roster.get("settings") or {}
        meta = u.get("metadata") or {}
        members.append(
            Member(
                user_id=str(user_id),
                roster_id=int(roster["roster_id"]),
                display_name=u.get("display_name") or "",
                team_name=meta.get("team_name") or None,
                avatar=u.get("avatar") or None,
                wins=int(settings.get("wins") or 0),
                losses=int(settings.get("losses") or 0),
                ties=int(settings.get("ties") or 0),
            )
        )
    members.sort(key=lambda m: m.roster_id)
    return members


def parse_matchups(raw: Iterable[Dict[str, Any]] | None) -> List[Matchup]:
    out: List[Matchup] = []
    for m in raw or []:
        # byes and unscheduled rosters have no matchup_id
        if m.get("matchup_id") is None or m.get("roster_id") is None:
            continue
        out.append(
            Matchup(
                matchup_id=int(m["matchup_id"]),
                roster_id=int(m["roster_id"]),
                points=_f(m.get("points")),
            )
        )
    return out


def parse_transactions(raw: Iterable[Dict[str, Any]] | None) -> List[Transaction]:
    out: List[Transaction] = []
    for t in raw or []:
        adds = t.get("adds")
        if adds:
            adds = {pid: roster_key(rid) for pid, rid in adds.items()}
        updated = t.get("status_updated")
        out.append(
            Transaction(
                type=str(t.get("type") or ""),
                status=str(t.get("status") or ""),
                adds=adds or None,
                status_updated=int(updated) if updated is not None else None,
                transaction_id=(
                    str(t["transaction_id"]) if t.get("transaction_id") else None
                ),
                leg=t.get("leg"),
            )
        )
    return out
