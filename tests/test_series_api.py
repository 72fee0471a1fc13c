def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_defaults_status_and_assigns_next_id(client):
    response = client.post("/api/series", json={"title": "Foo", "status": ""})
    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 4
    assert body["status"] == "planned"
    assert body["title"] == "Foo"


def test_create_requires_title(client):
    response = client.post("/api/series", json={"title": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "title is required"}


def test_malformed_json_body_is_a_client_error(client):
    response = client.post(
        "/api/series",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "invalid json body"}


def test_list_with_filters(client):
    assert [s["id"] for s in client.get("/api/series").json()] == [1, 2, 3]
    watching = client.get("/api/series", params={"status": "watching"}).json()
    assert [s["title"] for s in watching] == ["Severance"]
    found = client.get("/api/series", params={"q": "BREAKING"}).json()
    assert [s["title"] for s in found] == ["Breaking Bad"]


def test_get_single_series(client):
    assert client.get("/api/series/3").json()["title"] == "Dark"
    assert client.get("/api/series/42").status_code == 404


def test_patch_applies_only_sent_fields(client):
    before = client.get("/api/series/1").json()
    response = client.patch("/api/series/1", json={"rating": 8.0, "status": " watching ", "poster": None})
    assert response.status_code == 200
    body = response.json()
    assert body["rating"] == 8.0
    assert body["status"] == "watching"
    assert body["poster"] == before["poster"]
    assert body["overview"] == before["overview"]
    assert body["seasons"] == before["seasons"]


def test_patch_unknown_series(client):
    response = client.patch("/api/series/99", json={"rating": 1})
    assert response.status_code == 404
    assert response.json() == {"error": "series not found"}


def test_malformed_series_id(client):
    for bad in ("abc", "0", "-3", "99999999999999999999"):
        response = client.patch(f"/api/series/{bad}", json={"rating": 1})
        assert response.status_code == 400
        assert response.json() == {"error": "invalid series id"}


def test_delete_removes_series_permanently(client):
    response = client.delete("/api/series/2")
    assert response.status_code == 204
    assert [s["id"] for s in client.get("/api/series").json()] == [1, 3]
    again = client.delete("/api/series/2")
    assert again.status_code == 404
    assert again.json() == {"error": "series not found"}


def test_deleted_ids_are_not_reused(client):
    created = client.post("/api/series", json={"title": "Temp"}).json()
    client.delete(f"/api/series/{created['id']}")
    next_one = client.post("/api/series", json={"title": "Next"}).json()
    assert next_one["id"] == created["id"] + 1
