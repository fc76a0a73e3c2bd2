from __future__ import annotations

BASE = '/api/v1/alerts'


def test_list_alerts(client):
    resp = client.get(BASE)
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 2
    assert body[0]['incidentId'] == 1
    assert body[0]['serviceId'] == 1
    assert set(body[0]) == {'id', 'createdAt', 'updatedAt', 'name', 'description', 'incidentId', 'serviceId'}


def test_get_alert(client):
    resp = client.get(f'{BASE}/2')
    assert resp.status_code == 200
    assert resp.json()['name'] == 'User Service Alert'
    assert resp.json()['serviceId'] == 2


def test_get_missing_alert(client):
    resp = client.get(f'{BASE}/999')
    assert resp.status_code == 404
    assert resp.json() == {'error': 'Alert not found'}


def test_create_alert_with_associations(client):
    payload = {'name': 'Queue Backlog', 'description': 'Jobs piling up', 'incidentId': 2, 'serviceId': 1}
    resp = client.post(BASE, json=payload)
    assert resp.status_code == 201
    body = resp.json()
    for key, value in payload.items():
        assert body[key] == value
    assert body['id'] == 3


def test_create_alert_name_only(client):
    resp = client.post(BASE, json={'name': 'Standalone'})
    assert resp.status_code == 201
    body = resp.json()
    assert body['description'] is None
    assert body['incidentId'] is None
    assert body['serviceId'] is None


def test_create_alert_wrong_type_creates_nothing(client):
    resp = client.post(BASE, json={'name': 123})
    assert resp.status_code == 400
    assert len(client.get(BASE).json()) == 2


def test_create_alert_rejects_stringly_ids_and_snake_case(client):
    assert client.post(BASE, json={'name': 'x', 'incidentId': '1'}).status_code == 400
    assert client.post(BASE, json={'name': 'x', 'incident_id': 1}).status_code == 400
    assert client.post(BASE, json={'name': 'x', 'serviceId': True}).status_code == 400


def test_alert_ids_outside_64_bits_are_400(client):
    too_big = 2**70
    assert client.post(BASE, json={'name': 'x', 'incidentId': too_big}).status_code == 400
    assert client.post(BASE, json={'name': 'x', 'serviceId': -too_big}).status_code == 400
    assert client.patch(f'{BASE}/1', json={'serviceId': too_big}).status_code == 400
    assert len(client.get(BASE).json()) == 2
    assert client.get(f'{BASE}/1').json()['serviceId'] == 1


def test_patch_alert_detaches_incident(client):
    resp = client.patch(f'{BASE}/1', json={'incidentId': None})
    assert resp.status_code == 200
    body = resp.json()
    assert body['incidentId'] is None
    assert body['serviceId'] == 1
    assert body['name'] == 'API Gateway Alert'


def test_patch_missing_alert(client):
    assert client.patch(f'{BASE}/999', json={'name': 'x'}).status_code == 404


def test_patch_alert_invalid(client):
    assert client.patch(f'{BASE}/1', json={'serviceId': 'two'}).status_code == 400
    assert client.patch(f'{BASE}/oops', json={'name': 'x'}).status_code == 400


def test_delete_alert_twice(client):
    assert client.delete(f'{BASE}/2').status_code == 204
    assert client.delete(f'{BASE}/2').status_code == 204
    assert client.get(f'{BASE}/2').status_code == 404
