import json
import logging

from fastapi.testclient import TestClient
from school_api.main import app

client = TestClient(app)


def test_delete_school_cascades_to_dependents(school, student, teacher, subject, lesson, facility, achievement):
    r = client.delete(f"/api/schooldata/{school['id']}")
    assert r.status_code == 204
    assert client.get(f"/api/schooldata/{school['id']}").status_code == 404
    for path, row in (
        ('students', student),
        ('teachers', teacher),
        ('subjects', subject),
        ('lessons', lesson),
        ('facilities', facility),
        ('achievements', achievement),
    ):
        assert client.get(f"/api/{path}/{row['id']}").status_code == 404, path
        assert client.get(f"/api/{path}").json() == [], path


def test_health_and_request_id():
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert 'X-Request-ID' in r.headers


def test_request_id_is_propagated():
    r = client.get('/api/schooldata', headers={'X-Request-ID': 'cerebro-42'})
    assert r.status_code == 200
    assert r.headers['X-Request-ID'] == 'cerebro-42'


def test_api_requests_are_logged_as_json(caplog):
    caplog.set_level(logging.INFO, logger='school_api.api')
    client.get('/api/schooldata/404', headers={'X-Request-ID': 'cerebro-43'})
    client.get('/health')
    lines = [r.getMessage() for r in caplog.records if r.name == 'school_api.api']
    assert len(lines) == 1
    assert lines[0].startswith('request_done ')
    payload = json.loads(lines[0][len('request_done '):])
    assert payload['request_id'] == 'cerebro-43'
    assert payload['path'] == '/api/schooldata/404'
    assert payload['method'] == 'GET'
    assert payload['status_code'] == 404
    assert payload['duration_ms'] >= 0
