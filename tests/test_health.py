"""Health endpoint tests."""

def test_health_returns_ok(client):
    """GET /api/health returns { status: ok }."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
