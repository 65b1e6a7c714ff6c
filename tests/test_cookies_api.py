from fastapi.testclient import TestClient

from main import create_app
from signed_cookies.core.config import Settings
from signed_cookies.utils.cookies import CookieSigner

SECRET = "test-secret"


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_read_missing_cookie(client):
    response = client.get("/api/cookies/theme")
    assert response.status_code == 200
    assert response.json() == {"name": "theme", "value": None, "loaded": False, "state": "empty"}
    assert "set-cookie" not in response.headers
    assert "x-process-time" in response.headers


def test_set_then_read(client):
    response = client.put("/api/cookies/theme", json={"value": "dark"})
    assert response.status_code == 200
    assert response.json()["success"] is True

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("theme=")
    assert "Max-Age=3600" in set_cookie
    assert "HttpOnly" in set_cookie

    body = client.get("/api/cookies/theme").json()
    assert body["value"] == "dark"
    assert body["loaded"] is True
    assert body["state"] == "loaded"


def test_serialized_cookie_round_trip(client):
    value = {"items": [1, 2, 3], "note": "gift"}
    assert client.put("/api/cookies/cart", json={"value": value}).status_code == 200
    assert client.get("/api/cookies/cart").json()["value"] == value


def test_encrypted_cookie_round_trip(client):
    assert client.put("/api/cookies/token", json={"value": "secret"}).status_code == 200
    assert "secret" not in client.cookies["token"]
    assert client.get("/api/cookies/token").json()["value"] == "secret"


def test_delete_expires_cookie(client):
    client.put("/api/cookies/theme", json={"value": "dark"})

    response = client.delete("/api/cookies/theme")
    assert response.status_code == 200
    assert "Max-Age=0" in response.headers["set-cookie"]

    body = client.get("/api/cookies/theme").json()
    assert body["loaded"] is False
    assert body["value"] is None


def test_tampered_cookie_is_purged(settings):
    wire = CookieSigner(SECRET).dumps("theme", "dark")
    client = TestClient(create_app(settings), base_url="http://shop.example.com")

    response = client.get("/api/cookies/theme", headers={"Cookie": f"theme={wire[:-4]}evil"})

    assert response.json()["loaded"] is False
    assert response.json()["state"] == "purged"
    assert "Max-Age=0" in response.headers["set-cookie"]


def test_unsigned_cookie_is_ignored(client):
    response = client.get("/api/cookies/theme", headers={"Cookie": "theme=dark"})

    assert response.json()["state"] == "empty"
    assert "set-cookie" not in response.headers


def test_rotated_secret_rejects_cookie(settings):
    wire = CookieSigner(SECRET).dumps("theme", "dark")
    rotated = Settings(secret_key="rotated-secret", cookies=settings.cookies)
    client = TestClient(create_app(rotated), base_url="http://shop.example.com")

    body = client.get("/api/cookies/theme", headers={"Cookie": f"theme={wire}"}).json()

    assert body["loaded"] is False
    assert body["value"] is None


def test_undecodable_cookie_returns_generic_error(client):
    wire = CookieSigner(SECRET).dumps("cart", "{broken")

    response = client.get("/api/cookies/cart", headers={"Cookie": f"cart={wire}"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "COOKIE_READ_ERROR"
    assert body["error"] == "Error reading cookie data."
    assert body["details"] is None
    assert "broken" not in response.text


def test_invalid_cookie_name(client):
    response = client.get("/api/cookies/bad.name")
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_non_ascii_plain_value_round_trip(client):
    response = client.put("/api/cookies/theme", json={"value": "dark €"})
    assert response.status_code == 200

    body = client.get("/api/cookies/theme").json()
    assert body["value"] == "dark €"
    assert body["loaded"] is True


def test_cookie_domain_defaults_to_request_host(client):
    response = client.put("/api/cookies/theme", json={"value": "dark"})
    assert "Domain=shop.example.com" in response.headers["set-cookie"]

    response = client.delete("/api/cookies/theme")
    assert "Domain=shop.example.com" in response.headers["set-cookie"]


def test_unknown_route(client):
    response = client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_method_not_allowed(client):
    response = client.post("/api/cookies/theme")
    assert response.status_code == 405
    assert response.json()["code"] == "METHOD_NOT_ALLOWED"
