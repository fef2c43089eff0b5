import time

import pytest

from conftest import JWT_TEST_SECRET
from taskcore.app_sessions import persist_login
from taskcore.jwt_utils import JWTError, decode, encode, principal_from_claims


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_encode_decode_roundtrip():
    token = encode({"sub": "abc"}, secret="s")
    claims = decode(token, secret="s")
    assert claims["sub"] == "abc"
    assert claims["exp"] > claims["iat"]


@pytest.mark.parametrize(
    "mutate,reason",
    [
        (lambda t: t[:-2] + ("AA" if not t.endswith("AA") else "BB"), "bad signature"),
        (lambda t: "not-a-token", "malformed token"),
        (lambda t: t.rsplit(".", 1)[0] + ".\u00e9", "bad signature"),
    ],
)
def test_decode_rejects_tampered(mutate, reason):
    token = encode({"sub": "abc"}, secret="s")
    with pytest.raises(JWTError, match=reason):
        decode(mutate(token), secret="s")


def test_decode_rejects_wrong_secret():
    token = encode({"sub": "abc"}, secret="s")
    with pytest.raises(JWTError, match="bad signature"):
        decode(token, secret="other")


def test_decode_expiry_respects_leeway():
    now = int(time.time())
    token = encode({"sub": "abc", "exp": now - 10}, secret="s")
    assert decode(token, secret="s", leeway=30)["sub"] == "abc"
    with pytest.raises(JWTError, match="expired"):
        decode(token, secret="s", leeway=0)


def test_decode_not_yet_valid():
    token = encode({"sub": "abc", "nbf": int(time.time()) + 3600}, secret="s")
    with pytest.raises(JWTError, match="not yet valid"):
        decode(token, secret="s")


@pytest.mark.parametrize(
    "claims,expected",
    [
        ({"sub": "u1"}, "u1"),
        ({"userId": "u2"}, "u2"),
        ({"userId": 7}, "7"),
        ({"sub": ""}, None),
        ({}, None),
    ],
)
def test_principal_from_claims(claims, expected):
    assert principal_from_claims(claims) == expected


def test_bearer_token_authenticates(client, make_account):
    uid = make_account()
    token = encode({"sub": uid}, secret=JWT_TEST_SECRET)
    resp = client.post("/api/v1/tasks", json={"title": "via jwt"}, headers=_bearer(token))
    assert resp.status_code == 201
    assert resp.get_json()["task"]["ownerId"] == uid


def test_legacy_user_id_claim_authenticates(client, make_account):
    uid = make_account()
    token = encode({"userId": uid}, secret=JWT_TEST_SECRET)
    assert client.get("/api/v1/tasks", headers=_bearer(token)).status_code == 200


def test_bearer_with_bad_signature_is_401(client, make_account):
    uid = make_account()
    token = encode({"sub": uid}, secret="someone-else")
    resp = client.get("/api/v1/tasks", headers=_bearer(token))
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Authentication required"}


def test_expired_bearer_is_401(client, make_account):
    uid = make_account()
    token = encode({"sub": uid, "exp": int(time.time()) - 3600}, secret=JWT_TEST_SECRET)
    assert client.get("/api/v1/tasks", headers=_bearer(token)).status_code == 401


def test_bearer_takes_precedence_over_test_header(client, make_account):
    alice = make_account()
    bob = make_account()
    token = encode({"sub": alice}, secret=JWT_TEST_SECRET)
    resp = client.post(
        "/api/v1/tasks", json={"title": "who"}, headers={**_bearer(token), "X-User-Id": bob}
    )
    assert resp.get_json()["task"]["ownerId"] == alice


def test_cookie_session_authenticates(client, make_account):
    uid = make_account()
    with client.session_transaction() as sess:
        persist_login(sess, uid)
    resp = client.post("/api/v1/tasks", json={"title": "via cookie"})
    assert resp.status_code == 201
    assert resp.get_json()["task"]["ownerId"] == uid


def test_test_header_ignored_outside_testing(app, client, make_account, monkeypatch):
    uid = make_account()
    monkeypatch.setitem(app.config, "TESTING", False)
    assert client.get("/api/v1/tasks", headers={"X-User-Id": uid}).status_code == 401


@pytest.mark.parametrize("header", ["Bearer ", "Bearer", "Bearer    "])
def test_empty_bearer_falls_through_to_other_sources(client, make_account, header):
    uid = make_account()
    assert client.get("/api/v1/tasks", headers={"Authorization": header}).status_code == 401
    resp = client.get("/api/v1/tasks", headers={"Authorization": header, "X-User-Id": uid})
    assert resp.status_code == 200


def test_non_ascii_signature_is_401(client, make_account):
    uid = make_account()
    header_b, payload_b, _ = encode({"sub": uid}, secret=JWT_TEST_SECRET).split(".")
    resp = client.get("/api/v1/tasks", headers=_bearer(f"{header_b}.{payload_b}.é"))
    assert resp.status_code == 401
