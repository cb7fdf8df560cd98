# SPDX-License-Identifier: MIT
# weekly_costs/sleeper.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

import requests

from .fees import FeeSchedule
from .models import (
    LeagueState,
    Matchup,
    Member,
    Transaction,
    build_members,
    parse_matchups,
    parse_transactions,
)
from .periods import default_period

BASE = "https://api.sleeper.app/v1"


class SleeperClient:
    """Thin read-only wrapper over the public Sleeper v1 endpoints."""

    def __init__(self, session: requests.Session | None = None, timeout: float = 30):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "weekly-costs/0.1"})
        self.timeout = timeout

    def get(self, path: str) -> Any:
        r = self.session.get(f"{BASE}{path}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def league(self, league_id: str) -> Dict[str, Any]:
        return self.get(f"/league/{league_id}") or {}

    def rosters(self, league_id: str) -> List[Dict[str, Any]]:
        return self.get(f"/league/{league_id}/rosters") or []

    def users(self, league_id: str) -> List[Dict[str, Any]]:
        return self.get(f"/league/{league_id}/users") or []

    def matchups(self, league_id: str, leg: int) -> List[Dict[str, Any]]:
        return self.get(f"/league/{league_id}/matchups/{leg}") or []

    def transactions(self, league_id: str, leg: int) -> List[Dict[str, Any]]:
        return self.get(f"/league/{league_id}/transactions/{leg}") or []

    def nfl_state(self) -> Dict[str, Any]:
        return self.get("/state/nfl") or {}


@dataclass
class LeagueSnapshot:
    """Everything one period's summary needs, fetched up front."""

    league: Dict[str, Any]
    state: LeagueState
    members: List[Member]
    period: int
    matchups: List[Matchup] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)


def merge_transactions(*batches: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Concatenate raw transaction lists, dropping repeats by transaction_id."""
    seen = set()
    out: List[Dict[str, Any]] = []
    for batch in batches:
        for t in batch or []:
            tid = t.get("transaction_id")
            if tid is not None:
                if tid in seen:
                    continue
                seen.add(tid)
            out.append(t)
    return out


def fetch_state(client: SleeperClient, fees: FeeSchedule) -> LeagueState:
    try:
        raw = client.nfl_state()
    except requests.exceptions.RequestException as e:
        raise RuntimeError(f"Failed fetching NFL state. Error: {e}") from e
    return LeagueState.from_sleeper(raw, weeks=fees.weeks)


def fetch_snapshot(
    client: SleeperClient,
    league_id: str,
    fees: FeeSchedule,
    period: int | None = None,
    with_previous: bool = True,
) -> LeagueSnapshot:
    """Fetch league identity plus one period's matchups and transactions.

    When ``period`` is None the current leg is used during the regular season
    and week 1 otherwise. Either way the period must fall within the
    configured season length. With ``with_previous`` the prior period's
    transactions are merged in so that a date window can pick up moves Sleeper
    files under the neighbouring leg.
    """
    state = fetch_state(client, fees)
    leg = default_period(state) if period is None else period
    if not 1 <= leg <= fees.weeks:
        raise ValueError(f"period must be between 1 and {fees.weeks}, got {leg}")

    try:
        league = client.league(league_id)
        rosters = client.rosters(league_id)
        users = client.users(league_id)
    except requests.exceptions.RequestException as e:
        raise RuntimeError(
            f"Failed to load Sleeper league {league_id}. "
            f"Check LEAGUE and network. Error: {e}"
        ) from e

    try:
        raw_matchups = client.matchups(league_id, leg)
        batches = [client.transactions(league_id, leg)]
        if with_previous and leg > 1:
            batches.insert(0, client.transactions(league_id, leg - 1))
    except requests.exceptions.RequestException as e:
        raise RuntimeError(f"Failed fetching period {leg} data. Error: {e}") from e

    return LeagueSnapshot(
        league=league,
        state=state,
        members=build_members(users, rosters),
        period=leg,
        matchups=parse_matchups(raw_matchups),
        transactions=parse_transactions(merge_transactions(*batches)),
    )
