from conftest import auth_headers


def test_favorite_lifecycle(client, landlord, renter, make_property):
    prop = make_property(landlord)
    headers = auth_headers(renter)

    first = client.post(f"/api/favorites/{prop.id}", headers=headers)
    again = client.post(f"/api/favorites/{prop.id}", headers=headers)
    assert first.status_code == 201
    assert first.json()["id"] == again.json()["id"]

    listed = client.get("/api/favorites", headers=headers).json()
    assert [f["property_id"] for f in listed] == [prop.id]
    # contact gating applies to favourites too
    assert listed[0]["property"]["contact_details_hidden"] is True

    assert client.delete(f"/api/favorites/{prop.id}", headers=headers).status_code == 200
    assert client.get("/api/favorites", headers=headers).json() == []
    assert client.delete(f"/api/favorites/{prop.id}", headers=headers).status_code == 404


def test_cannot_favorite_inactive_or_missing(client, landlord, renter, make_property):
    inactive = make_property(landlord, is_active=False)
    headers = auth_headers(renter)
    assert client.post(f"/api/favorites/{inactive.id}", headers=headers).status_code == 404
    assert client.post("/api/favorites/9999", headers=headers).status_code == 404
    assert client.get("/api/favorites").status_code == 401
