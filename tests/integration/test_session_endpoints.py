from datetime import date, timedelta

from fastapi.testclient import TestClient

from clubmanager.models import AttendanceRecord, TrainingSession


def test_generate_sessions(client: TestClient, auth_headers, make_training, db_session):
    make_training()

    response = client.post("/sessions/generate", headers=auth_headers, json={"days_ahead": 14})

    assert response.status_code == 200
    assert response.json()["created"] in (2, 3)
    assert response.json()["errors"] == []
    assert db_session.query(TrainingSession).count() == response.json()["created"]


def test_generate_sessions_validates_days_ahead(client: TestClient, auth_headers):
    response = client.post("/sessions/generate", headers=auth_headers, json={"days_ahead": 0})
    assert response.status_code == 422


def test_generate_for_unknown_training(client: TestClient, auth_headers):
    response = client.post("/sessions/generate/missing", headers=auth_headers, json={})
    assert response.status_code == 404


def test_mark_attendance(client: TestClient, trainer_auth_headers, make_training, make_session, make_athlete, db_session):
    training_session = make_session(make_training(), date(2026, 3, 2))
    first, second = make_athlete("First"), make_athlete("Second")

    response = client.post(
        f"/sessions/{training_session.id}/attendance",
        headers=trainer_auth_headers,
        json={"entries": [
            {"athlete_id": first.id, "status": "PRESENT"},
            {"athlete_id": second.id, "status": "ABSENT_EXCUSED", "notes": "Sick"},
        ]},
    )

    assert response.status_code == 200
    assert {record["status"] for record in response.json()} == {"PRESENT", "ABSENT_EXCUSED"}
    assert db_session.query(AttendanceRecord).count() == 2


def test_mark_attendance_rejects_duplicate_athletes(client: TestClient, auth_headers, make_training, make_session, test_athlete):
    training_session = make_session(make_training(), date(2026, 3, 2))

    response = client.post(
        f"/sessions/{training_session.id}/attendance",
        headers=auth_headers,
        json={"entries": [
            {"athlete_id": test_athlete.id, "status": "PRESENT"},
            {"athlete_id": test_athlete.id, "status": "ABSENT_UNEXCUSED"},
        ]},
    )

    assert response.status_code == 422
    assert response.json()["detail"][0]["msg"] == "Each athlete may only appear once per attendance request"


def test_mark_attendance_on_cancelled_session(client: TestClient, auth_headers, make_training, make_session, test_athlete):
    training_session = make_session(make_training(), date(2026, 3, 2), is_cancelled=True)

    response = client.post(
        f"/sessions/{training_session.id}/attendance",
        headers=auth_headers,
        json={"entries": [{"athlete_id": test_athlete.id, "status": "PRESENT"}]},
    )

    assert response.status_code == 400


def test_complete_and_cancel(client: TestClient, auth_headers, make_training, make_session):
    training = make_training()
    to_complete = make_session(training, date(2026, 3, 2))
    to_cancel = make_session(training, date(2026, 3, 9))

    completed = client.post(f"/sessions/{to_complete.id}/complete", headers=auth_headers)
    cancelled = client.post(f"/sessions/{to_cancel.id}/cancel", headers=auth_headers, json={"reason": "Hall closed"})
    missing = client.post("/sessions/missing/complete", headers=auth_headers)

    assert completed.status_code == 200
    assert completed.json()["is_completed"] is True
    assert cancelled.json()["is_cancelled"] is True
    assert cancelled.json()["cancellation_reason"] == "Hall closed"
    assert missing.status_code == 404


def test_reassign_for_session(client: TestClient, auth_headers, make_training, make_session, assign, test_athlete):
    training = make_training(groups=("A", "B"))
    assign(training.training_groups[0], test_athlete)
    training_session = make_session(training, date(2026, 3, 2))
    payload = {"athlete_id": test_athlete.id, "target_group_id": training.training_groups[1].id}

    first = client.post(f"/sessions/{training_session.id}/reassign", headers=auth_headers, json=payload)
    again = client.post(f"/sessions/{training_session.id}/reassign", headers=auth_headers, json=payload)
    invalid = client.post(
        f"/sessions/{training_session.id}/reassign",
        headers=auth_headers,
        json={"athlete_id": test_athlete.id, "target_group_id": "missing"},
    )

    assert first.status_code == 200
    assert first.json()["warnings"] == []
    assert again.status_code == 200
    assert len(again.json()["warnings"]) == 1
    assert again.json()["reassignment"]["id"] == first.json()["reassignment"]["id"]
    assert invalid.status_code == 400


def test_athlete_cancels_own_session(
    client: TestClient, athlete_auth_headers, make_training, make_session, make_athlete, test_athlete
):
    training_session = make_session(make_training(), date.today() + timedelta(days=7))
    other = make_athlete("Other")

    own = client.post(
        f"/sessions/{training_session.id}/cancellations",
        headers=athlete_auth_headers,
        json={"athlete_id": test_athlete.id, "reason": "Holiday"},
    )
    duplicate = client.post(
        f"/sessions/{training_session.id}/cancellations",
        headers=athlete_auth_headers,
        json={"athlete_id": test_athlete.id, "reason": "Holiday"},
    )
    foreign = client.post(
        f"/sessions/{training_session.id}/cancellations",
        headers=athlete_auth_headers,
        json={"athlete_id": other.id, "reason": "Holiday"},
    )
    revoked = client.delete(f"/sessions/cancellations/{own.json()['id']}", headers=athlete_auth_headers)

    assert own.status_code == 201
    assert own.json()["is_active"] is True
    assert duplicate.status_code == 409
    assert foreign.status_code == 403
    assert revoked.status_code == 200
    assert revoked.json()["is_active"] is False


def test_cancellation_after_deadline(client: TestClient, athlete_auth_headers, make_training, make_session, test_athlete):
    training_session = make_session(make_training(), date.today() - timedelta(days=1))

    response = client.post(
        f"/sessions/{training_session.id}/cancellations",
        headers=athlete_auth_headers,
        json={"athlete_id": test_athlete.id, "reason": "Too late"},
    )

    assert response.status_code == 400


def test_unknown_athlete_is_rejected(client: TestClient, auth_headers, make_training, make_session, db_session):
    training = make_training(groups=("A", "B"))
    training_session = make_session(training, date(2026, 3, 2))

    reassigned = client.post(
        f"/sessions/{training_session.id}/reassign",
        headers=auth_headers,
        json={"athlete_id": "no-such-athlete", "target_group_id": training.training_groups[1].id},
    )
    marked = client.post(
        f"/sessions/{training_session.id}/attendance",
        headers=auth_headers,
        json={"entries": [{"athlete_id": "no-such-athlete", "status": "PRESENT"}]},
    )

    assert reassigned.status_code == 404
    assert marked.status_code == 404
    assert db_session.query(AttendanceRecord).count() == 0
