import os

# Point the app at an in-memory database before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from school_api.database import create_db_and_tables, drop_db_and_tables, get_session
from school_api.main import app

TEST_ENGINE = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


def _get_test_session():
    with Session(TEST_ENGINE) as session:
        yield session


app.dependency_overrides[get_session] = _get_test_session
client = TestClient(app)

POWER = {
    'powerName': 'Telekinesis',
    'powerLevel': 10,
    'powerDescription': 'Enables the user to mentally manipulate and move objects without physical contact.',
    'powerCategory': 'Psychic',
    'isPowerActive': True,
    'controlLevel': 10,
    'originSource': 'GENETIC_MUTATION',
}


@pytest.fixture(autouse=True)
def reset_db():
    """Give every test a fresh in-memory schema."""
    create_db_and_tables(TEST_ENGINE)
    yield
    drop_db_and_tables(TEST_ENGINE)


@pytest.fixture
def session():
    with Session(TEST_ENGINE) as session:
        yield session


def _post(path, payload):
    r = client.post(path, json=payload)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def school_payload():
    return {
        'schoolName': 'Xavier Institute for Higher Learning',
        'location': '1407 Graymalkin Lane, Salem Center, NY',
        'motto': 'Mutatis Mutandis',
        'yearEstablished': 1963,
        'affiliation': 'Mutant Education and Research',
        'contactInfo': '+1-555-XAVIER',
        'active': True,
    }


@pytest.fixture
def school(school_payload):
    return _post('/api/schooldata', school_payload)


@pytest.fixture
def subject(school):
    return _post('/api/subjects', {'name': 'Psychic Studies', 'schoolData': {'id': school['id']}})


@pytest.fixture
def teacher_payload(school, subject):
    return {
        'schoolData': {'id': school['id']},
        'firstName': 'Charles',
        'lastName': 'Xavier',
        'alias': 'Professor X',
        'power': dict(POWER),
        'missionHistory': ['Formed the X-Men'],
        'isActive': True,
        'email': 'professor.xavier@example.com',
        'phoneNumber': '+1-555-0303',
        'address': '1407 Graymalkin Lane, Salem Center, NY',
        'qualifications': 'PhD in Genetics, Mutant Studies',
        'yearsOfExperience': 20,
        'department': 'Psychic Studies',
        'subjects': [{'id': subject['id']}],
    }


@pytest.fixture
def teacher(teacher_payload):
    return _post('/api/teachers', teacher_payload)


@pytest.fixture
def student_payload(school):
    return {
        'schoolData': {'id': school['id']},
        'firstName': 'Jean',
        'lastName': 'Grey',
        'alias': 'Phoenix',
        'power': dict(POWER),
        'missionHistory': ['Mission X'],
        'isActive': True,
        'guardianFirstName': 'John',
        'guardianLastName': 'Grey',
        'guardianContactNumber': '+1-555-0101',
        'guardianEmail': 'john.grey@example.com',
        'contactNumber': '+1-555-0202',
        'email': 'jean.grey@example.com',
        'status': 'ACTIVE',
    }


@pytest.fixture
def student(student_payload):
    return _post('/api/students', student_payload)


@pytest.fixture
def lesson_payload(subject, teacher, student):
    return {
        'subject': {'id': subject['id']},
        'teacher': {'id': teacher['id']},
        'startTime': '2024-11-01T10:00:00',
        'endTime': '2024-11-01T11:30:00',
        'students': [{'id': student['id']}],
    }


@pytest.fixture
def lesson(lesson_payload):
    return _post('/api/lessons', lesson_payload)


@pytest.fixture
def facility_payload(school):
    return {
        'name': 'Training Room',
        'type': 'CLASSROOM',
        'description': 'A room equipped for training and practice.',
        'accessible': True,
        'locationWithinCampus': 'Main Building, 2nd Floor',
        'capacity': 30,
        'operational': True,
        'schoolData': {'id': school['id']},
    }


@pytest.fixture
def facility(facility_payload):
    return _post('/api/facilities', facility_payload)


@pytest.fixture
def achievement_payload(student):
    return {
        'title': 'Outstanding Contribution',
        'description': 'Awarded for innovative contributions to the annual school science fair.',
        'dateAwarded': '2021-05-21',
        'awardedBy': 'Professor Hank McCoy',
        'category': 'BIOLOGY',
        'student': {'id': student['id']},
    }


@pytest.fixture
def achievement(achievement_payload):
    return _post('/api/achievements', achievement_payload)
