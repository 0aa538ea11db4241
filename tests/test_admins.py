NEW_ADMIN = {
    "full_name": "Joseph Kamga",
    "role": "coordonateur",
    "email": "Joseph@Example.com",
    "user": "jkamga",
    "password": "coordpass",
}


def test_manager_creates_admin_with_hashed_password(client, admin_headers):
    r = client.post("/admin/admins", json=NEW_ADMIN, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["email"] == "joseph@example.com"

    login = client.post("/auth/admin/login", data={"username": "jkamga", "password": "coordpass"})
    assert login.status_code == 200


def test_duplicate_user_or_email(client, admin_headers):
    client.post("/admin/admins", json=NEW_ADMIN, headers=admin_headers)
    r = client.post("/admin/admins", json={**NEW_ADMIN, "email": "other@example.com"}, headers=admin_headers)
    assert r.status_code == 409
    r = client.post("/admin/admins", json={**NEW_ADMIN, "user": "other"}, headers=admin_headers)
    assert r.status_code == 409


def test_list_and_me(client, admin, admin_headers):
    assert len(client.get("/admin/admins", headers=admin_headers).json()) == 1
    assert client.get("/admin/admins/me", headers=admin_headers).json()["id"] == admin.id


def test_self_update_cannot_change_role(client, make_admin, headers_for):
    coord = make_admin(user="coord", email="coord@example.com", role="coordonateur")
    headers = headers_for(coord, "admin")

    r = client.put(f"/admin/admins/{coord.id}", json={"about_me": "Bonjour"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["about_me"] == "Bonjour"

    r = client.put(f"/admin/admins/{coord.id}", json={"role": "promoteur"}, headers=headers)
    assert r.status_code == 403


def test_non_manager_cannot_edit_others(client, admin, make_admin, headers_for):
    coord = make_admin(user="coord", email="coord@example.com", role="coordonateur")
    r = client.put(f"/admin/admins/{admin.id}", json={"about_me": "x"}, headers=headers_for(coord, "admin"))
    assert r.status_code == 403


def test_manager_changes_role(client, admin_headers, make_admin):
    coord = make_admin(user="coord", email="coord@example.com", role="coordonateur")
    r = client.put(f"/admin/admins/{coord.id}", json={"role": "chef coordonateur"}, headers=admin_headers)
    assert r.json()["role"] == "chef coordonateur"


def test_delete_rules(client, admin, admin_headers, make_admin, headers_for):
    chef = make_admin(user="chef", email="chef@example.com", role="chef coordonateur")
    chef_headers = headers_for(chef, "admin")

    # nobody deletes themself
    assert client.delete(f"/admin/admins/{admin.id}", headers=admin_headers).status_code == 400
    # only a promoteur deletes a promoteur
    r = client.delete(f"/admin/admins/{admin.id}?lang=en", headers=chef_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Only a promoteur can modify or delete a promoteur"

    assert client.delete(f"/admin/admins/{chef.id}", headers=admin_headers).status_code == 200
    assert client.get(f"/admin/admins/{chef.id}", headers=admin_headers).status_code == 404


def test_chef_cannot_touch_promoteur_account(client, admin, make_admin, headers_for):
    chef = make_admin(user="chef", email="chef@example.com", role="chef coordonateur")
    chef_headers = headers_for(chef, "admin")

    # demote first, then delete
    r = client.put(f"/admin/admins/{admin.id}?lang=en", json={"role": "coordonateur"}, headers=chef_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Only a promoteur can modify or delete a promoteur"
    assert client.delete(f"/admin/admins/{admin.id}", headers=chef_headers).status_code == 403

    r = client.put(f"/admin/admins/{admin.id}", json={"password": "takeover"}, headers=chef_headers)
    assert r.status_code == 403
    login = client.post("/auth/admin/login", data={"username": "awa", "password": "takeover"})
    assert login.status_code == 401


def test_only_promoteur_hands_out_promoteur_role(client, admin_headers, make_admin, headers_for):
    chef = make_admin(user="chef", email="chef@example.com", role="chef coordonateur")
    chef_headers = headers_for(chef, "admin")

    assert client.put(f"/admin/admins/{chef.id}", json={"role": "promoteur"}, headers=chef_headers).status_code == 403
    r = client.post("/admin/admins", json={**NEW_ADMIN, "role": "promoteur"}, headers=chef_headers)
    assert r.status_code == 403

    r = client.put(f"/admin/admins/{chef.id}", json={"role": "promoteur"}, headers=admin_headers)
    assert r.json()["role"] == "promoteur"


def test_duplicate_from_concurrent_insert(client, admin_headers, monkeypatch):
    from app.routers import admins

    client.post("/admin/admins", json=NEW_ADMIN, headers=admin_headers)
    monkeypatch.setattr(admins, "_ensure_unique", lambda *a, **kw: None)

    r = client.post("/admin/admins", json={**NEW_ADMIN, "email": "other@example.com"}, headers=admin_headers)
    assert r.status_code == 409
