def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"app": "Camrent", "status": "ok"}


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_validation_errors_are_400_with_field_detail(client):
    response = client.post("/api/auth/login", json={"email": "not-an-email"})
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid request data"
    locs = [tuple(e["loc"]) for e in body["errors"]]
    assert ("body", "email") in locs
    assert ("body", "password") in locs
