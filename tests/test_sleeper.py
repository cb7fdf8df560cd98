import pytest
import requests

from weekly_costs.fees import FeeSchedule
from weekly_costs.sleeper import fetch_snapshot, merge_transactions

LEAGUE = "784"


def test_client_get_and_errors(make_client):
    client = make_client({"/state/nfl": {"leg": 1}})
    assert client.nfl_state() == {"leg": 1}
    assert client.session.headers["User-Agent"].startswith("weekly-costs")
    with pytest.raises(requests.HTTPError):
        client.league("nope")


def test_merge_transactions_dedupes_by_id():
    a = [{"transaction_id": "1"}, {"transaction_id": "2"}]
    b = [{"transaction_id": "2"}, {"transaction_id": "3"}, {"type": "waiver"}]
    merged = merge_transactions(a, b, None)
    assert [t.get("transaction_id") for t in merged] == ["1", "2", "3", None]


def test_snapshot_current_leg_with_previous(routes, make_client):
    client = make_client(routes)
    snap = fetch_snapshot(client, LEAGUE, FeeSchedule())
    assert snap.period == 3
    assert snap.league["name"] == "Dollar League"
    assert [m.roster_id for m in snap.members] == [1, 2]
    assert len(snap.matchups) == 2
    assert sorted(t.transaction_id for t in snap.transactions) == ["t1", "t2"]
    assert f"/league/{LEAGUE}/transactions/2" in client.session.calls


def test_snapshot_explicit_period_without_previous(routes, make_client):
    client = make_client(routes)
    snap = fetch_snapshot(
        client,
        LEAGUE,
        FeeSchedule(),
        period=3,
        with_previous=False,
    )
    assert [t.transaction_id for t in snap.transactions] == ["t2"]
    assert f"/league/{LEAGUE}/transactions/2" not in client.session.calls


def test_snapshot_off_season_starts_at_week_one(routes, make_client):
    routes["/state/nfl"].update(leg=0, week=0, season_type="off")
    routes[f"/league/{LEAGUE}/matchups/1"] = []
    routes[f"/league/{LEAGUE}/transactions/1"] = []
    snap = fetch_snapshot(make_client(routes), LEAGUE, FeeSchedule())
    assert snap.period == 1
    assert snap.transactions == []


def test_snapshot_wraps_http_errors(routes, make_client):
    del routes[f"/league/{LEAGUE}/rosters"]
    with pytest.raises(RuntimeError, match="Failed to load Sleeper league"):
        fetch_snapshot(make_client(routes), LEAGUE, FeeSchedule())


def test_snapshot_default_leg_past_season_length(routes, make_client):
    routes["/state/nfl"].update(leg=17, week=17)
    with pytest.raises(ValueError, match="between 1 and 14"):
        fetch_snapshot(make_client(routes), LEAGUE, FeeSchedule())


@pytest.mark.parametrize("period", [0, 15])
def test_snapshot_explicit_period_out_of_range(routes, make_client, period):
    with pytest.raises(ValueError, match="between 1 and 14"):
        fetch_snapshot(make_client(routes), LEAGUE, FeeSchedule(), period=period)
