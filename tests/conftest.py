import pytest
import requests

from weekly_costs.sleeper import BASE, SleeperClient

LEAGUE = "784"


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


class FakeSession:
    """Serves canned Sleeper payloads keyed by path."""

    def __init__(self, routes):
        self.routes = routes
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None):
        path = url[len(BASE):]
        self.calls.append(path)
        if path not in self.routes:
            return FakeResponse(None, status=404)
        return FakeResponse(self.routes[path])


def league_routes(leg=3, season_type="regular"):
    return {
        "/state/nfl": {
            "leg": leg,
            "week": leg,
            "season": "2024",
            "season_type": season_type,
            "season_start_date": "2024-09-05",
        },
        f"/league/{LEAGUE}": {"name": "Dollar League"},
        f"/league/{LEAGUE}/users": [
            {"user_id": "a", "display_name": "alice", "metadata": {"team_name": "A"}},
            {"user_id": "b", "display_name": "bob", "metadata": {}},
        ],
        f"/league/{LEAGUE}/rosters": [
            {"roster_id": 2, "owner_id": "b", "settings": {"wins": 1, "losses": 1}},
            {"roster_id": 1, "owner_id": "a", "settings": {"wins": 2, "losses": 0}},
        ],
        f"/league/{LEAGUE}/matchups/3": [
            {"matchup_id": 1, "roster_id": 1, "points": 110.0},
            {"matchup_id": 1, "roster_id": 2, "points": 95.5},
        ],
        f"/league/{LEAGUE}/matchups/2": [],
        f"/league/{LEAGUE}/transactions/3": [
            {
                "transaction_id": "t2",
                "type": "waiver",
                "status": "complete",
                "adds": {"p1": 2},
                "status_updated": 1726660800000,  # 2024-09-18
                "leg": 3,
            }
        ],
        f"/league/{LEAGUE}/transactions/2": [
            {
                "transaction_id": "t1",
                "type": "free_agent",
                "status": "complete",
                "adds": {"p9": 1},
                "status_updated": 1726574400000,  # 2024-09-17
                "leg": 2,
            },
            {
                "transaction_id": "t2",
                "type": "waiver",
                "status": "complete",
                "adds": {"p1": 2},
                "status_updated": 1726660800000,
                "leg": 3,
            },
        ],
    }


@pytest.fixture
def routes():
    return league_routes()


@pytest.fixture
def make_client():
    def _make(routes):
        return SleeperClient(session=FakeSession(routes))

    return _make
