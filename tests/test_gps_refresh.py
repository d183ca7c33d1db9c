from unittest.mock import MagicMock, patch

from rq.exceptions import NoSuchJobError

from fieldops.jobs.gps_refresh import pending_assignment_ids, refresh_gps_timestamps
from fieldops.models import Assignment, Worker

from tests.helpers import add_samples, at

PLATE = "B 135 XOX"


def _finalized(db, **kw) -> Assignment:
    fields = dict(
        type="Interventie",
        status="Finalizat",
        team_lead="Ion",
        members=[],
        car_plate=PLATE,
        start_date=at("10:00"),
        created_at=at("10:00"),
        completion_date=at("18:00"),
        gps_start_date=at("10:05"),
        hours=7.92,
    )
    fields.update(kw)
    a = Assignment(**fields)
    db.add(a)
    db.commit()
    db.refresh(a)
    return a


def test_pending_ids(db):
    waiting = _finalized(db)
    _finalized(db, gps_completion_date=at("12:00"))
    _finalized(db, car_plate=None)
    _finalized(db, status="In Deplasare")
    assert pending_assignment_ids(db) == [waiting.id]


def test_refresh_fills_late_return_and_rebalances_hours(db, session_factory):
    db.add(Worker(name="Ion", total_hours=7.92))
    a = _finalized(db)
    add_samples(db, PLATE, [(at("10:05"), False), (at("12:05"), True)])

    summary = refresh_gps_timestamps(session_factory=session_factory)

    assert summary["status"] == "completed"
    assert summary["checked"] == 1
    assert summary["updated"] == [a.id]

    db.expire_all()
    a = db.query(Assignment).get(a.id)
    assert a.gps_completion_date == at("12:05")
    assert a.hours == 2.0
    assert db.query(Worker).one().total_hours == 2.0


def test_refresh_without_new_telemetry_changes_nothing(db, session_factory):
    a = _finalized(db)
    add_samples(db, PLATE, [(at("10:05"), False)])

    summary = refresh_gps_timestamps([a.id], session_factory=session_factory)

    assert summary["updated"] == []
    db.expire_all()
    assert db.query(Assignment).get(a.id).hours == 7.92


def test_enqueue_and_pending_endpoints(client, db):
    a = _finalized(db)
    assert client.get("/ops/gps-refresh/pending").json() == {"assignment_ids": [a.id]}

    fake_queue = MagicMock()
    fake_queue.enqueue.return_value.id = "job-1"
    with patch("fieldops.routers.ops_gps.gps_queue", fake_queue):
        r = client.post("/ops/gps-refresh", json={"assignment_ids": [a.id]})

    assert r.json() == {"job_id": "job-1", "status": "queued", "assignment_ids": [a.id]}
    args, kwargs = fake_queue.enqueue.call_args
    assert args == (refresh_gps_timestamps, [a.id])
    assert "job_timeout" in kwargs


def _job(**flags):
    job = MagicMock()
    job.is_finished = flags.get("finished", False)
    job.is_failed = flags.get("failed", False)
    job.is_started = flags.get("started", False)
    return job


def test_refresh_status_polling(client):
    with patch("fieldops.routers.ops_gps.Job") as job_cls:
        job_cls.fetch.side_effect = NoSuchJobError("no such job")
        assert client.get("/ops/gps-refresh/missing").status_code == 404

        job_cls.fetch.side_effect = None
        done = _job(finished=True)
        done.return_value.return_value = {"status": "completed", "checked": 2, "updated": [7]}
        job_cls.fetch.return_value = done
        assert client.get("/ops/gps-refresh/job-1").json() == {
            "status": "completed",
            "result": {"status": "completed", "checked": 2, "updated": [7]},
        }

        failed = _job(failed=True)
        failed.latest_result.return_value.exc_string = "OperationalError: database is locked"
        job_cls.fetch.return_value = failed
        assert client.get("/ops/gps-refresh/job-1").json() == {
            "status": "failed",
            "error": "OperationalError: database is locked",
        }

        job_cls.fetch.return_value = _job(started=True)
        assert client.get("/ops/gps-refresh/job-1").json() == {"status": "running"}

        job_cls.fetch.return_value = _job()
        assert client.get("/ops/gps-refresh/job-1").json() == {"status": "queued"}

    _, kwargs = job_cls.fetch.call_args
    assert "connection" in kwargs
