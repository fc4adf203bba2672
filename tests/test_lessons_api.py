from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy import DateTime

from school_api.main import app
from school_api.models import Lesson
from school_api.repositories import LessonRepository

client = TestClient(app)


def test_create_lesson(lesson_payload, subject, teacher, student):
    r = client.post('/api/lessons', json=lesson_payload)
    assert r.status_code == 201
    body = r.json()
    assert body['subject']['id'] == subject['id']
    assert body['teacher']['id'] == teacher['id']
    assert body['teacher']['firstName'] == 'Charles'
    assert [s['id'] for s in body['students']] == [student['id']]
    assert body['startTime'] == '2024-11-01T10:00:00'
    assert body['endTime'] == '2024-11-01T11:30:00'


def test_get_and_list_lessons(lesson):
    got = client.get(f"/api/lessons/{lesson['id']}")
    assert got.status_code == 200
    assert got.json() == lesson
    assert client.get('/api/lessons').json() == [lesson]


def test_update_lesson_replaces_students(lesson, lesson_payload, student_payload):
    bobby = client.post('/api/students', json=dict(student_payload, firstName='Bobby', lastName='Drake')).json()
    replacement = dict(
        lesson_payload,
        startTime='2024-12-11T09:00:00',
        endTime='2024-12-11T10:30:00',
        students=[{'id': bobby['id']}],
    )
    r = client.put(f"/api/lessons/{lesson['id']}", json=replacement)
    assert r.status_code == 200
    body = r.json()
    assert body['startTime'] == '2024-12-11T09:00:00'
    assert body['endTime'] == '2024-12-11T10:30:00'
    assert [s['id'] for s in body['students']] == [bobby['id']]


def test_offset_timestamps_are_stored_as_utc(lesson_payload):
    payload = dict(lesson_payload, startTime='2024-11-01T10:00:00+02:00', endTime='2024-11-01T11:30:00-05:00')
    r = client.post('/api/lessons', json=payload)
    assert r.status_code == 201
    assert r.json()['startTime'] == '2024-11-01T08:00:00'
    assert r.json()['endTime'] == '2024-11-01T16:30:00'
    got = client.get(f"/api/lessons/{r.json()['id']}").json()
    assert got['startTime'] == '2024-11-01T08:00:00'
    assert got['endTime'] == '2024-11-01T16:30:00'


def test_naive_timestamps_are_stored_unchanged(lesson, session):
    stored = LessonRepository(session).find_by_id(lesson['id'])
    assert stored.start_time == datetime(2024, 11, 1, 10, 0)
    assert stored.start_time.tzinfo is None
    assert stored.end_time == datetime(2024, 11, 1, 11, 30)


def test_lesson_time_columns_are_plain_datetime():
    for column in ('start_time', 'end_time'):
        assert type(Lesson.__table__.c[column].type) is DateTime


def test_create_lesson_with_unknown_teacher_is_400(lesson_payload):
    r = client.post('/api/lessons', json=dict(lesson_payload, teacher={'id': 9999}))
    assert r.status_code == 400
    assert r.json()['detail'] == 'Teacher not found with id 9999'


def test_create_lesson_requires_times(lesson_payload):
    payload = {k: v for k, v in lesson_payload.items() if k != 'startTime'}
    assert client.post('/api/lessons', json=payload).status_code == 422


def test_update_unknown_lesson_is_404(lesson_payload):
    assert client.put('/api/lessons/9999', json=lesson_payload).status_code == 404


def test_delete_lesson(lesson, student):
    assert client.delete(f"/api/lessons/{lesson['id']}").status_code == 204
    assert client.get(f"/api/lessons/{lesson['id']}").status_code == 404
    assert client.get(f"/api/students/{student['id']}").status_code == 200
