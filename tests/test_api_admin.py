def _create(client, **data):
    return client.post("/api/admin/create-user", json=data)


def test_create_and_list_users(client):
    resp = _create(client, email="Agent@VMS.dz", password="secret", role="operateur")
    assert resp.status_code == 201
    user = resp.get_json()["user"]
    assert user["email"] == "agent@vms.dz"
    assert user["role"] == "operateur"
    assert user["last_sign_in"] is None

    listed = client.get("/api/admin/list-users").get_json()["users"]
    assert [u["email"] for u in listed] == ["agent@vms.dz"]


def test_create_user_errors(client):
    assert _create(client, email="a@vms.dz", password="x").status_code == 400
    assert _create(client, email="a@vms.dz", password="x", role="root").status_code == 400

    assert _create(client, email="a@vms.dz", password="x", role="manager").status_code == 201
    duplicate = _create(client, email="A@vms.dz", password="y", role="admin")
    assert duplicate.status_code == 409
    assert "error" in duplicate.get_json()


def test_update_user_role(client):
    user_id = _create(client, email="b@vms.dz", password="x", role="operateur").get_json()["user"]["id"]

    resp = client.post("/api/admin/update-user", json={"userId": user_id, "role": "manager"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "manager"

    assert client.post("/api/admin/update-user", json={"userId": 999, "role": "admin"}).status_code == 404
    assert client.post("/api/admin/update-user", json={"userId": "abc", "role": "admin"}).status_code == 404
    assert client.post("/api/admin/update-user", json={"role": "admin"}).status_code == 400
    assert client.post("/api/admin/update-user", json={"userId": user_id, "role": "x"}).status_code == 400


def test_unknown_stored_role_is_reported_as_viewer(app, client):
    from app.extensions import db
    from app.models import User

    user = User(email="old@vms.dz", role="superuser")
    user.set_password("x")
    db.session.add(user)
    db.session.commit()

    listed = client.get("/api/admin/list-users").get_json()["users"]
    assert listed[0]["role"] == "viewer"


def test_admin_api_requires_admin_role(app, client):
    app.config["STUB_USER_ROLE"] = "manager"

    resp = client.get("/api/admin/list-users")

    assert resp.status_code == 403
    assert resp.get_json()["error"]


def test_password_is_hashed(app):
    from app.services.user_service import create_user

    user = create_user("hash@vms.dz", "s3cret", "admin")

    assert user.password_hash != "s3cret"
    assert user.check_password("s3cret")
    assert not user.check_password("autre")
