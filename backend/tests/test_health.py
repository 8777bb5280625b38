def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_root_lists_endpoints(client):
    data = client.get("/").json()
    assert data["endpoints"]["subscriptions"] == "/api/v1/webhooks/subscriptions"
