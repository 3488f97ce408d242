import os

# Must be set before the application reads its configuration
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_database.db")
os.environ.setdefault("CRON_API_KEY", "test-cron-key")

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from clubmanager.main import app
from clubmanager.database import Base
from clubmanager.dependencies import get_db
from clubmanager.models import (
    Athlete,
    YouthCategory,
    Trainer,
    TrainerRole,
    DayOfWeek,
    RecurrenceInterval,
    RecurringTraining,
    TrainingGroup,
    RecurringTrainingAthleteAssignment,
    RecurringTrainingTrainerAssignment,
    TrainingSession,
    SessionGroup,
    SessionGroupTrainerAssignment,
    AttendanceRecord,
    AttendanceStatus,
)
from clubmanager.auth.jwt_handler import create_access_token

DATABASE_URL = "sqlite:///./test_database.db"

_first_test = True


@pytest.fixture(scope="function")
def db_session():
    """
    One shared session per test on a freshly created SQLite schema.
    """
    global _first_test

    if _first_test and os.path.exists("test_database.db"):
        os.remove("test_database.db")
        _first_test = False

    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with `get_db` pointed at the test session.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


# --- People ---

@pytest.fixture
def test_admin(db_session: Session) -> Trainer:
    admin = Trainer(
        first_name="Anna",
        last_name="Admin",
        email="admin@club.example",
        role=TrainerRole.ADMIN,
        is_active=True,
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def test_trainer(db_session: Session) -> Trainer:
    trainer = Trainer(
        first_name="Tom",
        last_name="Trainer",
        email="trainer@club.example",
        role=TrainerRole.TRAINER,
        is_active=True,
    )
    db_session.add(trainer)
    db_session.commit()
    db_session.refresh(trainer)
    return trainer


@pytest.fixture
def make_athlete(db_session: Session):
    """Factory: make_athlete("Lena", youth_category=YouthCategory.C)"""
    counter = {"n": 0}

    def _make(
        first_name="Athlete", last_name=None, youth_category=None, is_approved=True, birth_date=date(2012, 3, 1), **kwargs
    ):
        counter["n"] += 1
        athlete = Athlete(
            first_name=first_name,
            last_name=last_name or f"No{counter['n']}",
            email=f"athlete{counter['n']}@club.example",
            birth_date=birth_date,
            youth_category=youth_category,
            is_approved=is_approved,
            **kwargs,
        )
        db_session.add(athlete)
        db_session.commit()
        db_session.refresh(athlete)
        return athlete

    return _make


@pytest.fixture
def test_athlete(make_athlete) -> Athlete:
    return make_athlete("Lena", "Schmidt", youth_category=YouthCategory.C)


# --- Schedule ---

@pytest.fixture
def make_training(db_session: Session):
    """
    Factory for a recurring training with named groups:
    make_training("Sprint", DayOfWeek.MONDAY, "17:00", "18:30", groups=("A", "B"))
    """
    def _make(
        name="Training",
        day_of_week=DayOfWeek.MONDAY,
        start_time="17:00",
        end_time="18:30",
        groups=("Group 1",),
        recurrence=RecurrenceInterval.WEEKLY,
        **kwargs,
    ):
        training = RecurringTraining(
            name=name,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            recurrence=recurrence,
            **kwargs,
        )
        db_session.add(training)
        db_session.flush()
        for index, group_name in enumerate(groups):
            db_session.add(TrainingGroup(recurring_training_id=training.id, name=group_name, sort_order=index))
        db_session.commit()
        db_session.refresh(training)
        return training

    return _make


@pytest.fixture
def assign(db_session: Session):
    """Directly persist an athlete assignment, bypassing validation."""
    def _assign(group: TrainingGroup, athlete: Athlete):
        assignment = RecurringTrainingAthleteAssignment(training_group_id=group.id, athlete_id=athlete.id)
        db_session.add(assignment)
        db_session.commit()
        return assignment

    return _assign


@pytest.fixture
def assign_trainer(db_session: Session):
    def _assign(group: TrainingGroup, trainer: Trainer, is_primary=False):
        assignment = RecurringTrainingTrainerAssignment(
            training_group_id=group.id, trainer_id=trainer.id, is_primary=is_primary
        )
        db_session.add(assignment)
        db_session.commit()
        return assignment

    return _assign


@pytest.fixture
def make_session(db_session: Session):
    """
    Factory for a training session with one session group per training
    group; trainers given are attached to every session group.
    """
    def _make(training=None, session_date=None, is_completed=False, trainers=(), **kwargs):
        session_date = session_date or date.today()
        training_session = TrainingSession(
            date=session_date,
            day_of_week=training.day_of_week if training else DayOfWeek.MONDAY,
            recurring_training_id=training.id if training else None,
            is_completed=is_completed,
            completed_at=datetime.utcnow() if is_completed else None,
            **kwargs,
        )
        db_session.add(training_session)
        db_session.flush()

        if training:
            for group in training.training_groups:
                session_group = SessionGroup(training_session_id=training_session.id, training_group_id=group.id)
                db_session.add(session_group)
                db_session.flush()
                for trainer in trainers:
                    db_session.add(SessionGroupTrainerAssignment(
                        session_group_id=session_group.id, trainer_id=trainer.id
                    ))

        db_session.commit()
        db_session.refresh(training_session)
        return training_session

    return _make


@pytest.fixture
def mark(db_session: Session):
    """Directly persist an attendance record."""
    def _mark(training_session: TrainingSession, athlete: Athlete, status: AttendanceStatus):
        record = AttendanceRecord(
            training_session_id=training_session.id,
            athlete_id=athlete.id,
            status=status,
        )
        db_session.add(record)
        db_session.commit()
        return record

    return _mark


# --- Auth ---

def _headers(email: str, user_id: str, role: str) -> dict:
    token = create_access_token(data={"sub": email, "id": user_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_admin):
    return _headers(test_admin.email, test_admin.id, "ADMIN")


@pytest.fixture
def trainer_auth_headers(test_trainer):
    return _headers(test_trainer.email, test_trainer.id, "TRAINER")


@pytest.fixture
def athlete_auth_headers(test_athlete):
    return _headers(test_athlete.email, test_athlete.id, "ATHLETE")


@pytest.fixture
def cron_headers():
    return {"X-API-Key": "test-cron-key"}
