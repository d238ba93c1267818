# tests/test_health.py


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "ok"
    assert "version" in data
    assert "ts" in data


def test_root(client):
    data = client.get("/").json()
    assert data["status"] == "running"
    assert data["name"] == "Creator Leads API"
