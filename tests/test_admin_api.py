from werkzeug.security import check_password_hash

from conftest import as_user, ts


def test_list_all_tasks_with_owner_summary(client, make_account, seed_task):
    admin = make_account("admin", username="boss")
    alice = make_account("user", username="alice")
    seed_task(alice, "old", ts(1))
    seed_task(admin, "mid", ts(2))
    seed_task(alice, "new", ts(3), priority="high")

    resp = client.get("/api/v1/tasks/admin/all", headers=as_user(admin))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["count"] == 3
    assert [t["title"] for t in body["tasks"]] == ["new", "mid", "old"]
    newest = body["tasks"][0]
    assert newest["priority"] == "high"
    assert newest["ownerId"] == alice
    assert newest["owner"] == {"id": alice, "username": "alice", "email": "alice@example.com"}
    assert body["tasks"][1]["owner"]["username"] == "boss"


def test_list_all_tasks_empty(client, make_account):
    admin = make_account("admin")
    resp = client.get("/api/v1/tasks/admin/all", headers=as_user(admin))
    assert resp.get_json() == {"success": True, "count": 0, "tasks": []}


def test_list_users(client, make_account):
    admin = make_account("admin", username="root")
    make_account("user", username="carol")

    resp = client.get("/api/v1/admin/users", headers=as_user(admin))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["count"] == 2
    by_name = {u["username"]: u for u in body["users"]}
    assert set(by_name) == {"root", "carol"}
    carol = by_name["carol"]
    assert carol["email"] == "carol@example.com"
    assert carol["role"] == "user"
    assert carol["createdAt"] and carol["updatedAt"]
    # exposed field carries the stored hash, never the plaintext
    assert carol["password"] != "pw"
    assert check_password_hash(carol["password"], "pw")
    assert by_name["root"]["role"] == "admin"


def test_deleting_account_cascades_tasks(client, make_account, seed_task):
    from taskcore.db import get_session
    from taskcore.models import User

    admin = make_account("admin")
    alice = make_account("user")
    seed_task(alice, "doomed", ts(1))
    db = get_session()
    try:
        db.delete(db.get(User, alice))
        db.commit()
    finally:
        db.close()
    resp = client.get("/api/v1/tasks/admin/all", headers=as_user(admin))
    assert resp.get_json()["count"] == 0
