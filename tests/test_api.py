"""End-to-end tests of the v1 HTTP routes."""

from conference_central_api.app.core.security import Identity


def test_save_and_get_profile(client, alice, auth_headers):
    headers = auth_headers(alice)

    response = client.get("/api/v1/profile", headers=headers)
    assert response.status_code == 200
    assert response.json() is None

    response = client.post("/api/v1/profile", json={}, headers=headers)
    assert response.status_code == 200
    assert response.json() == {
        "user_id": "alice-id",
        "display_name": "alice",
        "main_email": "alice@example.com",
        "tee_shirt_size": "NOT_SPECIFIED",
    }

    response = client.post("/api/v1/profile", json={"tee_shirt_size": "M_W"}, headers=headers)
    assert response.json()["tee_shirt_size"] == "M_W"
    assert response.json()["display_name"] == "alice"

    response = client.get("/api/v1/profile", headers=headers)
    assert response.json()["tee_shirt_size"] == "M_W"


def test_profile_routes_require_authentication(client):
    response = client.post("/api/v1/profile", json={"display_name": "x"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert client.get("/api/v1/profile").status_code == 401


def test_invalid_token_is_unauthorized(client):
    headers = {"Authorization": "Bearer not.a.token"}
    assert client.get("/api/v1/profile", headers=headers).status_code == 401


def test_invalid_tee_shirt_size_is_rejected(client, alice, auth_headers):
    response = client.post("/api/v1/profile", json={"tee_shirt_size": "HUGE"}, headers=auth_headers(alice))
    assert response.status_code == 422


def test_malformed_email_is_bad_request(client, auth_headers):
    carol = Identity(user_id="carol-id", email="carol")
    response = client.post("/api/v1/profile", json={}, headers=auth_headers(carol))
    assert response.status_code == 400


def test_create_and_list_conferences(client, alice, bob, auth_headers):
    response = client.post(
        "/api/v1/conference",
        json={"name": "Beta", "city": "Berlin", "start_date": "2026-09-01", "max_attendees": 10},
        headers=auth_headers(alice),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["organizer_user_id"] == "alice-id"
    assert body["month"] == 9
    assert body["seats_available"] == 10

    client.post("/api/v1/conference", json={"name": "Alpha"}, headers=auth_headers(bob))
    client.post("/api/v1/conference", json={"name": "Aardvark"}, headers=auth_headers(alice))

    response = client.post("/api/v1/queryConferences")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Aardvark", "Alpha", "Beta"]

    response = client.post("/api/v1/getConferencesCreated", headers=auth_headers(alice))
    assert [c["name"] for c in response.json()] == ["Aardvark", "Beta"]

    # Creating a conference stored a default profile for bob.
    response = client.get("/api/v1/profile", headers=auth_headers(bob))
    assert response.json()["display_name"] == "bob"


def test_conference_routes_require_authentication(client):
    assert client.post("/api/v1/conference", json={"name": "Sneaky"}).status_code == 401
    assert client.post("/api/v1/getConferencesCreated").status_code == 401
    assert client.post("/api/v1/queryConferences").json() == []


def test_conference_without_name_is_created_but_not_listed(client, alice, auth_headers):
    response = client.post("/api/v1/conference", json={"city": "Berlin"}, headers=auth_headers(alice))
    assert response.status_code == 201
    assert response.json()["name"] is None
    assert response.json()["city"] == "Berlin"
    assert client.post("/api/v1/queryConferences").json() == []


def test_token_without_email_scope_hides_email(client, alice, auth_headers):
    headers = auth_headers(alice, scope="openid profile")
    response = client.post("/api/v1/profile", json={}, headers=headers)
    assert response.status_code == 200
    assert response.json()["main_email"] is None
    assert response.json()["display_name"] is None
