from datetime import date, datetime, timedelta
from unittest.mock import Mock

import pytest

from clubmanager.errors.session_errors import AbsenceAlertNotFound
from clubmanager.models import AbsenceAlert, AttendanceStatus, Cancellation
from clubmanager.schemas.settings import SystemSettingsUpdate
from clubmanager.schemas.training_session import AttendanceEntry
from clubmanager.services.absence_alert import AbsenceAlertService
from clubmanager.services.attendance import AttendanceService
from clubmanager.services.notifications import EmailDeliveryError, EmailSender
from clubmanager.services.settings import SettingsService

NOW = datetime(2026, 3, 20, 12, 0)


@pytest.fixture
def email_sender():
    return Mock(spec=EmailSender)


@pytest.fixture
def service(db_session, email_sender):
    return AbsenceAlertService(db_session, email_sender)


@pytest.fixture
def update_settings(db_session):
    def _update(**values):
        return SettingsService(db_session).update_settings(SystemSettingsUpdate(**values), modified_by="admin")
    return _update


@pytest.fixture
def athlete_in_training(make_training, assign, test_athlete):
    training = make_training()
    assign(training.training_groups[0], test_athlete)
    return training


def test_counts_unexcused_and_unmarked_sessions(
    service, db_session, athlete_in_training, make_session, mark, test_athlete
):
    unexcused = make_session(athlete_in_training, date(2026, 3, 2))
    make_session(athlete_in_training, date(2026, 3, 9))                    # no record
    excused = make_session(athlete_in_training, date(2026, 3, 11))
    notified = make_session(athlete_in_training, date(2026, 3, 16))        # cancelled in advance
    make_session(athlete_in_training, date(2026, 3, 18), is_cancelled=True)
    make_session(athlete_in_training, date(2026, 3, 25))                   # future
    mark(unexcused, test_athlete, AttendanceStatus.ABSENT_UNEXCUSED)
    mark(excused, test_athlete, AttendanceStatus.ABSENT_EXCUSED)
    db_session.add(Cancellation(athlete_id=test_athlete.id, training_session_id=notified.id, reason="Trip"))
    db_session.commit()

    assert service.count_unexcused_absences(test_athlete.id, window_days=30, now=NOW) == 2


def test_below_threshold_creates_no_alert(service, email_sender, athlete_in_training, make_session, test_athlete):
    make_session(athlete_in_training, date(2026, 3, 9))
    make_session(athlete_in_training, date(2026, 3, 16))

    assert service.check_and_send_absence_alert(test_athlete.id, now=NOW) is None
    email_sender.send.assert_not_called()


def test_alert_is_persisted_and_sent(service, db_session, email_sender, athlete_in_training, make_session, test_athlete):
    for day in (2, 9, 16):
        make_session(athlete_in_training, date(2026, 3, day))

    alert = service.check_and_send_absence_alert(test_athlete.id, now=NOW)

    assert alert is not None
    assert alert.absence_count == 3
    assert alert.absence_period_start == date(2026, 2, 18)
    assert alert.absence_period_end == date(2026, 3, 20)
    assert alert.email_sent_to_athlete is True
    assert alert.email_sent_to_admin is True
    assert email_sender.send.call_count == 2
    assert email_sender.send.call_args_list[0].args[0] == test_athlete.email
    assert db_session.query(AbsenceAlert).count() == 1


def test_email_failure_keeps_alert(service, email_sender, athlete_in_training, make_session, test_athlete):
    email_sender.send.side_effect = EmailDeliveryError("SMTP down")
    for day in (2, 9, 16):
        make_session(athlete_in_training, date(2026, 3, day))

    alert = service.check_and_send_absence_alert(test_athlete.id, now=NOW)

    assert alert is not None
    assert alert.email_sent_to_athlete is False
    assert alert.email_sent_to_admin is False


def test_cooldown_suppresses_repeated_alerts(
    service, update_settings, athlete_in_training, make_session, mark, test_athlete
):
    update_settings(absence_alert_threshold=2)
    mark(make_session(athlete_in_training, date(2026, 3, 2)), test_athlete, AttendanceStatus.ABSENT_UNEXCUSED)
    make_session(athlete_in_training, date(2026, 3, 9))
    make_session(athlete_in_training, date(2026, 3, 13))

    assert service.check_and_send_absence_alert(test_athlete.id, now=NOW) is not None
    assert service.check_and_send_absence_alert(test_athlete.id, now=NOW + timedelta(days=1)) is None

    # 14 day cooldown is over, two absences still inside the window
    assert service.check_and_send_absence_alert(test_athlete.id, now=NOW + timedelta(days=15)) is not None


def test_disabled_alerts(service, update_settings, athlete_in_training, make_session, test_athlete):
    update_settings(absence_alert_enabled=False)
    for day in (2, 9, 16):
        make_session(athlete_in_training, date(2026, 3, day))

    assert service.check_and_send_absence_alert(test_athlete.id, now=NOW) is None


def test_unknown_athlete(service):
    assert service.check_and_send_absence_alert("missing", now=NOW) is None


def test_check_all_athletes_skips_unapproved(service, make_training, make_session, assign, make_athlete):
    training = make_training()
    approved = make_athlete("Approved")
    pending = make_athlete("Pending", is_approved=False)
    assign(training.training_groups[0], approved)
    assign(training.training_groups[0], pending)
    for day in (2, 9, 16):
        make_session(training, date(2026, 3, day))

    alerts = service.check_all_athletes(now=NOW)

    assert [alert.athlete_id for alert in alerts] == [approved.id]


def test_acknowledge_and_list(service, athlete_in_training, make_session, test_athlete, test_trainer):
    for day in (2, 9, 16):
        make_session(athlete_in_training, date(2026, 3, day))
    alert = service.check_and_send_absence_alert(test_athlete.id, now=NOW)

    acknowledged = service.acknowledge_alert(alert.id, test_trainer.id)

    assert acknowledged.acknowledged_by == test_trainer.id
    assert acknowledged.acknowledged_at is not None
    assert [a.id for a in service.get_athlete_alerts(test_athlete.id)] == [alert.id]
    assert [a.id for a in service.get_recent_alerts(days=7, now=NOW)] == [alert.id]
    assert service.get_recent_alerts(days=7, now=NOW + timedelta(days=30)) == []

    with pytest.raises(AbsenceAlertNotFound):
        service.acknowledge_alert("missing", test_trainer.id)


def test_marking_unexcused_triggers_alert_check(
    db_session, email_sender, athlete_in_training, make_session, test_athlete, test_trainer
):
    today = date.today()
    for days_ago in (9, 6, 3):
        make_session(athlete_in_training, today - timedelta(days=days_ago))
    yesterday = make_session(athlete_in_training, today - timedelta(days=1))

    AttendanceService(db_session, email_sender).mark_attendance(
        yesterday.id,
        [AttendanceEntry(athlete_id=test_athlete.id, status=AttendanceStatus.ABSENT_UNEXCUSED)],
        marked_by=test_trainer.id,
    )

    alert = db_session.query(AbsenceAlert).one()
    assert alert.athlete_id == test_athlete.id
    assert alert.absence_count == 4
    assert email_sender.send.called


def test_third_unexcused_absence_marked_today_triggers_alert(
    db_session, email_sender, athlete_in_training, make_session, mark, test_athlete, test_trainer
):
    today = datetime.utcnow().date()
    for days_ago in (14, 7):
        mark(make_session(athlete_in_training, today - timedelta(days=days_ago)), test_athlete,
             AttendanceStatus.ABSENT_UNEXCUSED)
    todays_session = make_session(athlete_in_training, today)

    AttendanceService(db_session, email_sender).mark_attendance(
        todays_session.id,
        [AttendanceEntry(athlete_id=test_athlete.id, status=AttendanceStatus.ABSENT_UNEXCUSED)],
        marked_by=test_trainer.id,
    )

    alert = db_session.query(AbsenceAlert).one()
    assert alert.absence_count == 3
    assert alert.absence_period_end == today


def test_unmarked_session_today_counts_once_started(service, make_training, assign, make_session, test_athlete):
    training = make_training(start_time="17:00", end_time="18:30")
    assign(training.training_groups[0], test_athlete)
    make_session(training, NOW.date())

    assert service.count_unexcused_absences(test_athlete.id, window_days=30, now=NOW) == 0
    assert service.count_unexcused_absences(test_athlete.id, window_days=30, now=NOW.replace(hour=18)) == 1
