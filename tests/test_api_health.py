from __future__ import annotations

from sqlalchemy import create_engine

from incidentstore.db.schema import make_session_factory


def test_healthz(anon_client):
    resp = anon_client.get('/healthz', headers={'x-request-id': 'req-health-1'})
    assert resp.status_code == 200
    body = resp.json()
    assert body['status'] == 'ok'
    assert body['system'] == 'incidentstore'
    assert resp.headers['x-request-id'] == 'req-health-1'
    assert 'x-elapsed-ms' in resp.headers


def test_readyz_reports_db(anon_client):
    resp = anon_client.get('/readyz')
    assert resp.status_code == 200
    body = resp.json()
    assert body['status'] == 'ready'
    assert body['checks']['db'] is True
    assert body['details']['db']['dialect'] == 'sqlite'


def test_readyz_not_ready_when_store_down(anon_client, deps, monkeypatch):
    unreachable = create_engine('sqlite:////nonexistent-dir/incidentstore/ready.db')
    monkeypatch.setattr(deps, 'session_factory', make_session_factory(unreachable))
    resp = anon_client.get('/readyz')
    assert resp.status_code == 503
    body = resp.json()
    assert body['status'] == 'not_ready'
    assert body['checks']['db'] is False
    unreachable.dispose()


def test_metrics_counts_requests(client):
    client.get('/api/v1/incidents')
    client.get('/api/v1/incidents/999')
    resp = client.get('/metrics')
    assert resp.status_code == 200
    text = resp.text
    assert 'incidentstore_http_requests_total 2.0' in text
    assert 'incidentstore_http_status_404_total 1.0' in text


def test_metrics_can_be_disabled(anon_client):
    anon_client.app.state.settings.enable_metrics = False
    resp = anon_client.get('/metrics')
    assert resp.status_code == 503
    assert resp.json() == {'error': 'Metrics are disabled'}


def test_request_id_generated_when_absent(client):
    resp = client.get('/api/v1/services')
    assert resp.headers['x-request-id']
