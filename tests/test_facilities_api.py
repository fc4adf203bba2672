from fastapi.testclient import TestClient
from school_api.main import app

client = TestClient(app)


def test_create_facility(facility_payload, school):
    r = client.post('/api/facilities', json=facility_payload)
    assert r.status_code == 201
    body = r.json()
    assert body['name'] == 'Training Room'
    assert body['type'] == 'CLASSROOM'
    assert body['accessible'] is True
    assert body['operational'] is True
    assert body['locationWithinCampus'] == 'Main Building, 2nd Floor'
    assert body['capacity'] == 30
    assert body['schoolData']['id'] == school['id']


def test_facility_flags_accept_is_prefix(facility_payload):
    payload = {k: v for k, v in facility_payload.items() if k not in ('accessible', 'operational')}
    payload.update(isAccessible=True, isOperational=False)
    body = client.post('/api/facilities', json=payload).json()
    assert body['accessible'] is True
    assert body['operational'] is False


def test_update_facility(facility, facility_payload):
    replacement = dict(facility_payload, type='GYM', capacity=120, operational=False)
    r = client.put(f"/api/facilities/{facility['id']}", json=replacement)
    assert r.status_code == 200
    body = r.json()
    assert body['type'] == 'GYM'
    assert body['capacity'] == 120
    assert body['operational'] is False
    assert client.get(f"/api/facilities/{facility['id']}").json() == body


def test_unknown_facility_type_is_422(facility_payload):
    assert client.post('/api/facilities', json=dict(facility_payload, type='HANGAR')).status_code == 422


def test_facility_not_found(facility_payload):
    assert client.get('/api/facilities/9999').status_code == 404
    assert client.put('/api/facilities/9999', json=facility_payload).status_code == 404


def test_delete_facility(facility, school):
    assert client.delete(f"/api/facilities/{facility['id']}").status_code == 204
    assert client.get(f"/api/facilities/{facility['id']}").status_code == 404
    assert client.get(f"/api/schooldata/{school['id']}").status_code == 200
