from app.models.teacher import Teacher
from app.utils.hashing import verify_password


REGISTRATION = {
    "full_name": "  Brigitte Ateba ",
    "user": "bateba",
    "email": "Brigitte@Example.com",
    "password": "motdepasse",
    "contact": "6 99 11 22 33",
    "town": "Douala",
    "gender": "female",
    "category": "bilingue",
    "subjects": ["English", " ", "Français"],
    "location": ["Akwa"],
    "available_days": ["Samedi"],
}


def test_register_teacher_pending_approval(client, db):
    r = client.post("/teachers/register", json=REGISTRATION)
    assert r.status_code == 201
    body = r.json()
    assert body["is_approved"] is False
    assert body["full_name"] == "Brigitte Ateba"
    assert body["email"] == "brigitte@example.com"
    assert body["contact"] == "+237699112233"
    assert body["subjects"] == ["English", "Français"]
    assert "password" not in body

    stored = db.query(Teacher).filter(Teacher.user == "bateba").one()
    assert stored.password != "motdepasse"
    assert verify_password("motdepasse", stored.password)


def test_register_reports_missing_fields(client):
    r = client.post("/teachers/register?lang=en", json={"full_name": "X"})
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail.startswith("Missing required fields:")
    assert "email" in detail and "subjects" in detail


def test_register_duplicate_username(client, make_teacher):
    make_teacher(user="bateba")
    r = client.post("/teachers/register", json=REGISTRATION)
    assert r.status_code == 409


def test_register_short_password(client):
    r = client.post("/teachers/register?lang=en", json={**REGISTRATION, "password": "abc"})
    assert r.status_code == 400
    assert "at least 4" in r.json()["detail"]


def test_public_list_only_approved_sorted_by_success_rate(client, make_teacher):
    make_teacher(user="a", full_name="Alpha", success_rate=40)
    make_teacher(user="b", full_name="Beta", success_rate=95)
    make_teacher(user="c", full_name="Gamma", is_approved=False, success_rate=100)

    r = client.get("/teachers")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert [t["full_name"] for t in body["items"]] == ["Beta", "Alpha"]
    assert "email" not in body["items"][0]
    assert "contact" not in body["items"][0]


def test_public_search_and_filters(client, make_teacher):
    make_teacher(user="a", full_name="Alpha", subjects=["Chimie"], gender="female")
    make_teacher(user="b", full_name="Beta", subjects=["Histoire"], location=["Essos"])

    assert client.get("/teachers", params={"q": "chim"}).json()["total"] == 1
    assert client.get("/teachers", params={"q": "essos"}).json()["total"] == 1
    assert client.get("/teachers", params={"gender": "female"}).json()["items"][0]["full_name"] == "Alpha"


def test_teacher_detail_hides_unapproved(client, make_teacher):
    t = make_teacher(is_approved=False)
    assert client.get(f"/teachers/{t.id}").status_code == 404


def test_teacher_detail_with_comments(client, db, make_teacher, make_student):
    from app.models.comment import Comment

    t = make_teacher()
    s = make_student(teachers=[t])
    db.add(Comment(teacher_id=t.id, student_id=s.id, content="Très bon", rating=5))
    db.commit()

    body = client.get(f"/teachers/{t.id}").json()
    assert body["comments"][0]["student_name"] == "Paul Essomba"
    assert body["comments"][0]["rating"] == 5


def test_update_my_profile(client, make_teacher, headers_for):
    t = make_teacher()
    headers = headers_for(t, "teacher")

    r = client.put("/teachers/me", json={"town": " Kribi ", "password": ""}, headers=headers)
    assert r.status_code == 200
    assert r.json()["town"] == "Kribi"

    r = client.put("/teachers/me", json={"town": "   "}, headers=headers)
    assert r.status_code == 400

    r = client.put("/teachers/me", json={"is_approved": True}, headers=headers)
    assert r.status_code == 422


def test_my_students_only_show_own_payments(client, make_teacher, make_student, headers_for):
    t1 = make_teacher(user="t1")
    t2 = make_teacher(user="t2")
    make_student(teachers=[t1, t2])

    r = client.get("/teachers/me/students", headers=headers_for(t1, "teacher"))
    assert r.status_code == 200
    students = r.json()
    assert len(students) == 1
    assert students[0]["class"] == "Form 3"
    assert [p["teacher_id"] for p in students[0]["payments"]] == [t1.id]


def test_my_payments(client, make_teacher, make_student, headers_for):
    t = make_teacher()
    make_student(teachers=[t], amount=20000)
    r = client.get("/teachers/me/payments", headers=headers_for(t, "teacher"))
    assert [p["amount"] for p in r.json()] == [20000]


def test_register_rejects_blank_only_lists(client):
    payload = {**REGISTRATION, "subjects": ["  "], "location": [""], "available_days": [" "]}
    r = client.post("/teachers/register?lang=en", json=payload)
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert "subjects" in detail and "location" in detail and "available_days" in detail


def test_register_rejects_student_style_username(client, db, make_teacher, make_student):
    make_student(teachers=[make_teacher()])

    r = client.post("/teachers/register?lang=en", json={**REGISTRATION, "user": "st00f1"})
    assert r.status_code == 409
    assert "reserved" in r.json()["detail"]

    r = client.post("/teachers/register", json={**REGISTRATION, "user": "ST00B7"})
    assert r.status_code == 409
    assert db.query(Teacher).filter(Teacher.user.ilike("st00%")).count() == 0

    login = client.post("/auth/login", data={"username": "ST00F1", "password": "marie essomba"})
    assert login.status_code == 200
    assert login.json()["role"] == "student"


def test_register_rejects_login_already_in_use(client, make_teacher):
    make_teacher(user="jmbarga", email="jean@example.com")

    r = client.post("/teachers/register?lang=en", json={**REGISTRATION, "email": "Jean@Example.com"})
    assert r.status_code == 409
    assert r.json()["detail"] == "Email already used."

    # one teacher's username cannot be another teacher's email
    r = client.post("/teachers/register", json={**REGISTRATION, "user": "jean@example.com"})
    assert r.status_code == 409


def test_self_edit_cannot_take_another_login(client, make_teacher, headers_for):
    make_teacher(user="other", email="other@example.com")
    t = make_teacher(user="mine", email="mine@example.com")
    headers = headers_for(t, "teacher")

    assert client.put("/teachers/me", json={"email": "OTHER@example.com"}, headers=headers).status_code == 409
    assert client.put("/teachers/me", json={"user": "ST00A3"}, headers=headers).status_code == 409
    assert client.put("/teachers/me", json={"subjects": [" "]}, headers=headers).status_code == 400

    # sending back your own values is fine
    r = client.put("/teachers/me", json={"user": "mine", "email": "mine@example.com"}, headers=headers)
    assert r.status_code == 200


def test_register_duplicate_from_concurrent_insert(client, make_teacher, monkeypatch):
    from app.utils import teacher_fields

    make_teacher(user="bateba", email="first@example.com")
    # the other request commits between our check and our insert
    monkeypatch.setattr(teacher_fields, "ensure_credentials_free", lambda *a, **kw: None)

    r = client.post("/teachers/register?lang=en", json=REGISTRATION)
    assert r.status_code == 409
    assert r.json()["detail"] == "Username already used. Please choose another."
