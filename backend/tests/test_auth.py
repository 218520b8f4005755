from tenantcms.domain.roles import Role

from .helpers import API, PASSWORD, bearer, register


def login(client, email, password=PASSWORD):
    return client.post(f"{API}/auth/login", json={"email": email, "password": password})


def test_register_creates_tenant_with_admin(client):
    resp = register(client, email="a@acme.com", domain="acme.com")

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["user"]["email"] == "a@acme.com"
    assert body["user"]["role"] == "ADMIN"
    assert "passwordHash" not in body["user"]
    assert body["tenant"]["domain"] == "acme.com"
    assert body["tenant"]["settings"]["default_role"] == "EDITOR"
    assert body["tokens"]["expiresIn"] == 24 * 60 * 60


def test_register_rejects_taken_email_and_domain(client, acme):
    same_email = register(client, email="a@acme.com", domain="other.com")
    assert same_email.status_code == 409
    assert same_email.get_json()["details"] == {"scope": "user.email", "key": "a@acme.com"}

    same_domain = register(client, email="b@acme.com", domain="acme.com")
    assert same_domain.status_code == 409
    assert same_domain.get_json()["details"]["scope"] == "tenant.domain"


def test_register_validates_payload(client):
    resp = register(client, email="not-an-email", domain="acme.com", password="short")

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    fields = {error["field"] for error in body["details"]}
    assert {"email", "password"} <= fields


def test_register_rejects_non_json_body(client):
    resp = client.post(f"{API}/auth/register", data="nope", content_type="text/plain")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid request body"


def test_login_failures_are_indistinguishable(client, acme, make_user):
    make_user(acme["tenant_id"], Role.EDITOR, "gone@acme.com", is_active=False)

    ok = login(client, "a@acme.com")
    assert ok.status_code == 200
    assert ok.get_json()["tokens"]["accessToken"]

    wrong_password = login(client, "a@acme.com", "wrong-password")
    unknown_email = login(client, "nobody@acme.com")
    inactive = login(client, "gone@acme.com")

    for resp in (wrong_password, unknown_email, inactive):
        assert resp.status_code == 401
        assert resp.get_json() == {
            "error": "authentication_failed",
            "message": "Email or password is incorrect",
        }


def test_me_returns_user_and_tenant(client, acme):
    resp = client.get(f"{API}/auth/me", headers=acme["headers"])

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["user"]["id"] == acme["user_id"]
    assert body["tenant"]["id"] == acme["tenant_id"]


def test_protected_route_requires_bearer_token(client):
    missing = client.get(f"{API}/auth/me")
    malformed = client.get(f"{API}/auth/me", headers={"Authorization": "Token abc"})
    garbage = client.get(f"{API}/auth/me", headers=bearer("not-a-jwt"))

    assert missing.status_code == 401
    assert malformed.status_code == 401
    assert garbage.status_code == 401
    assert garbage.get_json()["message"] == "Invalid token"


def test_refresh_issues_new_pair(client, acme):
    resp = client.post(f"{API}/auth/refresh", json={"refreshToken": acme["tokens"]["refreshToken"]})

    assert resp.status_code == 200
    tokens = resp.get_json()["tokens"]
    me = client.get(f"{API}/auth/me", headers=bearer(tokens["accessToken"]))
    assert me.status_code == 200


def test_token_types_are_not_interchangeable(client, acme):
    refresh_as_access = client.get(f"{API}/auth/me", headers=bearer(acme["tokens"]["refreshToken"]))
    access_as_refresh = client.post(
        f"{API}/auth/refresh", json={"refreshToken": acme["tokens"]["accessToken"]}
    )

    assert refresh_as_access.status_code == 401
    assert access_as_refresh.status_code == 401


def test_logout_acknowledges(client, acme):
    resp = client.post(f"{API}/auth/logout", headers=acme["headers"])
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Logout successful"
