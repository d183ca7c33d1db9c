import csv
import io

from fieldops.models import Assignment, Store

from tests.helpers import at

RANGE = {"from": "2026-03-01", "to": "2026-03-31"}


def _seed(db):
    db.add_all([
        Assignment(type="Interventie", status="Finalizat", team_lead="Ion", members=["Ana"],
                   start_date=at("08:00", "2026-03-02"), hours=3.5, km=120.0,
                   store_number="101", store_points=["102", "101"]),
        Assignment(type="Interventie", status="Finalizat", team_lead="Ana", members=["Mihai"],
                   start_date=at("08:00", "2026-03-05"), hours=2.0, km=None,
                   store_number="abc", store_points=["103"]),
        Assignment(type="Optimizare", status="Finalizat", team_lead="Mihai", members=[],
                   start_date=at("08:00", "2026-03-20"), hours=6.0, km=40.5),
        # active: counted in distribution only
        Assignment(type="Deschidere", status="In Deplasare", team_lead="Ion", members=[],
                   start_date=at("08:00", "2026-03-25")),
        # outside range
        Assignment(type="Interventie", status="Finalizat", team_lead="Ion", members=[],
                   start_date=at("08:00", "2026-04-02"), hours=10.0, km=500.0),
    ])
    db.add_all([
        Store(store_id=101, description="Militari", city="Bucuresti"),
        Store(store_id=102, description="Ploiesti Nord", city="Ploiesti"),
        Store(store_id=999, description="Unused"),
    ])
    db.commit()


def test_top_workers_credits_whole_team(client, db):
    _seed(db)
    r = client.get("/dashboard/top-workers", params={**RANGE, "limit": -1})
    assert r.status_code == 200
    assert r.json() == [
        {"name": "Mihai", "hours": 8.0, "assignments": 2},
        {"name": "Ana", "hours": 5.5, "assignments": 2},
        {"name": "Ion", "hours": 3.5, "assignments": 1},
    ]

    r = client.get("/dashboard/top-workers", params={**RANGE, "limit": 1})
    assert [w["name"] for w in r.json()] == ["Mihai"]


def test_top_riders_skips_assignments_without_km(client, db):
    _seed(db)
    r = client.get("/dashboard/top-riders", params={**RANGE, "limit": -1})
    assert r.json() == [
        {"name": "Ana", "km": 120.0, "assignments": 1},
        {"name": "Ion", "km": 120.0, "assignments": 1},
        {"name": "Mihai", "km": 40.5, "assignments": 1},
    ]


def test_work_distribution(client, db):
    _seed(db)
    r = client.get("/dashboard/work-distribution", params=RANGE)
    assert r.json() == [
        {"type": "Deschidere", "count": 1, "hours": 0.0},
        {"type": "Interventie", "count": 2, "hours": 5.5},
        {"type": "Optimizare", "count": 1, "hours": 6.0},
    ]


def test_totals(client, db):
    _seed(db)
    data = client.get("/dashboard/totals", params=RANGE).json()
    assert data["total_hours"] == 11.5
    assert data["total_km"] == 160.5
    assert data["range"] == {"key": None, "frm": "2026-03-01", "to": "2026-03-31"}


def test_inverted_range_is_rejected(client):
    r = client.get("/dashboard/totals", params={"from": "2026-03-31", "to": "2026-03-01"})
    assert r.status_code == 400


def test_preset_range_key_is_echoed(client):
    data = client.get("/dashboard/totals", params={"range": "last-month"}).json()
    assert data["range"]["key"] == "last-month"
    assert data["range"]["frm"].endswith("-01")


def test_type_month_with_store_details(client, db):
    _seed(db)
    r = client.get("/dashboard/type", params={"type": "Interventie", "month": "2026-03"})
    assert r.status_code == 200
    data = r.json()
    assert data["month"] == "2026-03"
    assert [a["start_date"][:10] for a in data["assignments"]] == ["2026-03-05", "2026-03-02"]
    # "abc" is ignored, 103 has no store row
    assert [s["store_id"] for s in data["stores"]] == [101, 102]


def test_type_month_rejects_unknown_type(client):
    r = client.get("/dashboard/type", params={"type": "Vacanta"})
    assert r.status_code == 400


def test_export_work_logs(client, db):
    _seed(db)
    r = client.get("/dashboard/export", params=RANGE)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "work_logs_2026-03-01_to_2026-03-31.csv" in r.headers["content-disposition"]

    rows = list(csv.DictReader(io.StringIO(r.text)))
    assert len(rows) == 4
    assert rows[0]["members"] == "Ana"
    assert rows[0]["hours"] == "3.5"
