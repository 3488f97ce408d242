from datetime import date

from fastapi.testclient import TestClient

from clubmanager.models import AbsenceAlert, AttendanceStatus, TrainingSession


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


def test_cron_requires_api_key(client: TestClient):
    missing = client.post("/cron/generate-sessions")
    wrong = client.post("/cron/generate-sessions", headers={"X-API-Key": "wrong"})

    assert missing.status_code == 403
    assert wrong.status_code == 403


def test_cron_generates_sessions(client: TestClient, cron_headers, make_training, db_session):
    make_training()

    response = client.post("/cron/generate-sessions", headers=cron_headers)

    assert response.status_code == 200
    assert response.json()["created"] > 0
    assert db_session.query(TrainingSession).count() == response.json()["created"]


def test_cron_absence_sweep(client: TestClient, cron_headers, db_session):
    response = client.post("/cron/absence-alerts", headers=cron_headers)

    assert response.status_code == 200
    assert response.json()["alerts_created"] == 0
    assert db_session.query(AbsenceAlert).count() == 0


def test_read_settings_defaults(client: TestClient, trainer_auth_headers):
    response = client.get("/settings/", headers=trainer_auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["cancellation_deadline_hours"] == 2
    assert body["absence_alert_threshold"] == 3
    assert body["absence_alert_window_days"] == 30
    assert body["session_generation_days_ahead"] == 90


def test_update_settings(client: TestClient, auth_headers, trainer_auth_headers, test_admin):
    forbidden = client.patch("/settings/", headers=trainer_auth_headers, json={"absence_alert_threshold": 5})
    invalid = client.patch("/settings/", headers=auth_headers, json={"absence_alert_threshold": 0})
    no_window = client.patch("/settings/", headers=auth_headers, json={"absence_alert_window_days": 0})
    updated = client.patch("/settings/", headers=auth_headers, json={"absence_alert_threshold": 5})

    assert forbidden.status_code == 403
    assert invalid.status_code == 422
    assert no_window.status_code == 422
    assert updated.status_code == 200
    assert updated.json()["absence_alert_threshold"] == 5
    assert updated.json()["absence_alert_window_days"] == 30
    assert updated.json()["last_modified_by"] == test_admin.id


def test_attendance_statistics(client: TestClient, auth_headers, make_training, make_session, mark, test_athlete):
    training = make_training("Sprint")
    mark(make_session(training, date(2026, 3, 2)), test_athlete, AttendanceStatus.PRESENT)
    mark(make_session(training, date(2026, 3, 9)), test_athlete, AttendanceStatus.ABSENT_UNEXCUSED)

    response = client.get(
        "/statistics/attendance", headers=auth_headers, params={"date_from": "2026-03-01", "date_to": "2026-03-31"}
    )
    reversed_range = client.get(
        "/statistics/attendance", headers=auth_headers, params={"date_from": "2026-03-31", "date_to": "2026-03-01"}
    )

    assert response.status_code == 200
    assert response.json()["total_sessions"] == 2
    assert reversed_range.status_code == 400


def test_athlete_reads_only_own_statistics(client: TestClient, athlete_auth_headers, make_athlete, test_athlete):
    other = make_athlete("Other")

    own = client.get(
        f"/statistics/athletes/{test_athlete.id}/monthly", headers=athlete_auth_headers, params={"month": "2026-03-01"}
    )
    foreign = client.get(f"/statistics/athletes/{other.id}/monthly", headers=athlete_auth_headers)
    overview = client.get("/statistics/comparison", headers=athlete_auth_headers)

    assert own.status_code == 200
    assert own.json()["total"] == 0
    assert foreign.status_code == 403
    assert overview.status_code == 403


def test_trainer_hours_access(client: TestClient, auth_headers, trainer_auth_headers, test_trainer, test_admin):
    own = client.get(
        f"/trainer-hours/{test_trainer.id}/sessions", headers=trainer_auth_headers, params={"month": 3, "year": 2026}
    )
    foreign = client.get(
        f"/trainer-hours/{test_admin.id}/sessions", headers=trainer_auth_headers, params={"month": 3, "year": 2026}
    )
    overview = client.get("/trainer-hours/", headers=auth_headers, params={"month": 3, "year": 2026})

    assert own.status_code == 200
    assert own.json() == []
    assert foreign.status_code == 403
    assert overview.status_code == 200
    assert {s["trainer_id"] for s in overview.json()} == {test_trainer.id, test_admin.id}


def test_adjust_trainer_hours(client: TestClient, auth_headers, test_trainer):
    response = client.put(
        f"/trainer-hours/{test_trainer.id}",
        headers=auth_headers,
        json={"month": 3, "year": 2026, "adjusted_hours": 2.5, "notes": "Camp"},
    )
    missing = client.put(
        "/trainer-hours/missing", headers=auth_headers, json={"month": 3, "year": 2026, "adjusted_hours": 1}
    )

    assert response.status_code == 200
    assert response.json()["final_hours"] == 2.5
    assert response.json()["notes"] == "Camp"
    assert missing.status_code == 404
