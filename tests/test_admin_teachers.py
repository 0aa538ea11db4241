from urllib.parse import unquote

from app.models.comment import Comment
from app.models.payment import Payment
from app.models.student_teacher_relation import StudentTeacherRelation
from app.models.teacher import Teacher


NEW_TEACHER = {
    "full_name": "Eric Tchoua",
    "user": "etchoua",
    "email": "eric@example.com",
    "password": "secret123",
    "contact": "237670000000",
    "town": "Bafoussam",
    "gender": "male",
    "category": "anglo",
    "subjects": ["Biology"],
    "location": ["Tamdja"],
    "available_days": ["Monday"],
    "is_approved": True,
}


def test_admin_lists_all_teachers_with_filters(client, make_teacher, admin_headers):
    make_teacher(user="a", full_name="Alpha")
    make_teacher(user="b", full_name="Beta", is_approved=False)

    r = client.get("/admin/teachers", headers=admin_headers)
    assert r.json()["total"] == 2
    assert "email" in r.json()["items"][0]

    r = client.get("/admin/teachers", params={"is_approved": False}, headers=admin_headers)
    assert [t["full_name"] for t in r.json()["items"]] == ["Beta"]


def test_manager_creates_teacher(client, admin_headers):
    r = client.post("/admin/teachers", json=NEW_TEACHER, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["is_approved"] is True
    assert r.json()["contact"] == "+237670000000"


def test_coordonateur_cannot_create_teacher(client, make_admin, headers_for):
    coord = make_admin(user="coord", email="coord@example.com", role="coordonateur")
    r = client.post("/admin/teachers?lang=en", json=NEW_TEACHER, headers=headers_for(coord, "admin"))
    assert r.status_code == 403
    assert "promoteur" in r.json()["detail"]


def test_approve_and_reject(client, make_teacher, admin_headers):
    t = make_teacher(is_approved=False)

    r = client.post(f"/admin/teachers/{t.id}/approve", headers=admin_headers)
    assert r.json()["is_approved"] is True

    r = client.post(f"/admin/teachers/{t.id}/reject", headers=admin_headers)
    assert r.json()["is_approved"] is False


def test_bulk_approve(client, make_teacher, admin_headers):
    ids = [make_teacher(user=f"u{i}", is_approved=False).id for i in range(3)]
    r = client.post("/admin/teachers/bulk-approve", json={"ids": ids[:2]}, headers=admin_headers)
    assert r.json() == {"updated": 2}

    approved = client.get("/admin/teachers", params={"is_approved": True}, headers=admin_headers).json()
    assert approved["total"] == 2


def test_update_teacher_rehashes_password(client, db, make_teacher, admin_headers):
    t = make_teacher()
    r = client.put(
        f"/admin/teachers/{t.id}",
        json={"password": "newpass", "success_rate": 90},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["success_rate"] == 90

    login = client.post("/auth/login", data={"username": "jmbarga", "password": "newpass"})
    assert login.status_code == 200


def test_delete_teacher_cascades(client, db, make_teacher, make_student, admin_headers):
    t = make_teacher()
    s = make_student(teachers=[t])
    db.add(Comment(teacher_id=t.id, student_id=s.id, content="ok", rating=4))
    db.commit()

    r = client.delete(f"/admin/teachers/{t.id}", headers=admin_headers)
    assert r.status_code == 200

    assert db.query(Teacher).count() == 0
    assert db.query(StudentTeacherRelation).count() == 0
    assert db.query(Payment).count() == 0
    assert db.query(Comment).count() == 0


def test_bulk_delete(client, db, make_teacher, admin_headers):
    ids = [make_teacher(user=f"u{i}").id for i in range(3)]
    r = client.post("/admin/teachers/bulk-delete", json={"ids": ids[:2]}, headers=admin_headers)
    assert r.json() == {"deleted": 2}
    assert db.query(Teacher).count() == 1


def test_contact_link(client, make_teacher, admin_headers):
    t = make_teacher(gender="female", full_name="Alice Nkeng")
    r = client.get(f"/admin/teachers/{t.id}/contact-link?lang=fr", headers=admin_headers)
    body = r.json()
    assert body["url"].startswith("https://wa.me/237659821731?text=")
    assert body["message"].startswith("Bonjour/Bonsoir Mme Alice Nkeng")
    assert unquote(body["url"].split("text=")[1]) == body["message"]


def test_missing_teacher_is_404(client, admin_headers):
    r = client.get("/admin/teachers/999?lang=en", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Teacher not found"


def test_bulk_reject(client, db, make_teacher, admin_headers):
    ids = [make_teacher(user=f"u{i}").id for i in range(3)]
    r = client.post("/admin/teachers/bulk-reject", json={"ids": ids[1:]}, headers=admin_headers)
    assert r.json() == {"updated": 2}

    db.expire_all()
    approved = {t.id: t.is_approved for t in db.query(Teacher).all()}
    assert approved == {ids[0]: True, ids[1]: False, ids[2]: False}


def test_coordonateur_cannot_run_bulk_actions(client, db, make_teacher, make_admin, headers_for):
    ids = [make_teacher(user=f"u{i}", is_approved=False).id for i in range(2)]
    coord = make_admin(user="coord", email="coord@example.com", role="coordonateur")
    headers = headers_for(coord, "admin")

    for action in ("bulk-delete", "bulk-approve", "bulk-reject"):
        r = client.post(f"/admin/teachers/{action}", json={"ids": ids}, headers=headers)
        assert r.status_code == 403

    db.expire_all()
    assert db.query(Teacher).filter(Teacher.is_approved.is_(False)).count() == 2


def test_create_teacher_rejects_blank_lists_and_taken_logins(client, make_teacher, make_student, admin_headers):
    r = client.post(
        "/admin/teachers?lang=en",
        json={**NEW_TEACHER, "subjects": [" ", ""]},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert "subjects" in r.json()["detail"]

    make_student(teachers=[make_teacher(user="jmbarga", email="jean@example.com")])
    for override in ({"user": "ST00F1"}, {"email": "JEAN@example.com"}, {"user": "JMBARGA"}):
        r = client.post("/admin/teachers", json={**NEW_TEACHER, **override}, headers=admin_headers)
        assert r.status_code == 409


def test_update_teacher_cannot_reuse_another_login(client, make_teacher, admin_headers):
    make_teacher(user="first", email="first@example.com")
    t = make_teacher(user="second", email="second@example.com")

    r = client.put(f"/admin/teachers/{t.id}", json={"email": "first@example.com"}, headers=admin_headers)
    assert r.status_code == 409
    r = client.put(f"/admin/teachers/{t.id}", json={"location": [""]}, headers=admin_headers)
    assert r.status_code == 400


def test_create_teacher_duplicate_from_concurrent_insert(client, make_teacher, admin_headers, monkeypatch):
    from app.utils import teacher_fields

    make_teacher(user="etchoua", email="someone@example.com")
    monkeypatch.setattr(teacher_fields, "ensure_credentials_free", lambda *a, **kw: None)

    r = client.post("/admin/teachers", json=NEW_TEACHER, headers=admin_headers)
    assert r.status_code == 409
