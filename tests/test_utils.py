from datetime import date
from urllib.parse import unquote

import pytest

from app.utils.dates import add_months, is_overdue
from app.utils.i18n import normalize_language, t
from app.utils.sitemap import STATIC_ROUTES, build_sitemap
from app.utils.student_ids import next_identifier
from app.utils.whatsapp import build_link, company_message, normalize_phone, teacher_contact_message


@pytest.mark.parametrize(
    "category, existing, expected",
    [
        ("anglo", [], "ST00A1"),
        ("anglo", ["ST00A1", "ST00A7", "ST00F9"], "ST00A8"),
        ("franco", ["ST00F2", None, "bogus"], "ST00F3"),
        ("bilingue", ["ST00A5"], "ST00B1"),
    ],
)
def test_next_identifier(category, existing, expected):
    assert next_identifier(category, existing) == expected


def test_add_months_clamps_to_month_end():
    assert add_months(date(2025, 1, 31)) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31)) == date(2024, 2, 29)
    assert add_months(date(2025, 12, 15)) == date(2026, 1, 15)


def test_is_overdue():
    today = date(2025, 6, 1)
    assert is_overdue(date(2025, 5, 31), "pending", today) is True
    assert is_overdue(date(2025, 5, 31), "completed", today) is False
    assert is_overdue(date(2025, 6, 1), "pending", today) is False
    assert is_overdue(None, "pending", today) is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("6 59 82 17 31", "+237659821731"),
        ("237659821731", "+237659821731"),
        ("+237 659-821-731", "+237659821731"),
        ("", ""),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_build_link_encodes_message():
    url = build_link("+237 659 82 17 31", "Bonjour, ça va ?")
    assert url.startswith("https://wa.me/237659821731?text=")
    assert " " not in url
    assert unquote(url.split("text=")[1]) == "Bonjour, ça va ?"


def test_company_message_fallback():
    assert company_message("unknown", "en", "SmartGen Educ") == (
        "Hello, I'd like information about SmartGen Educ services"
    )


def test_teacher_contact_message_titles():
    assert teacher_contact_message("Paul", "male", "en", "SmartGen Educ").startswith("Hello Mr. Paul")
    assert teacher_contact_message("Awa", "female", "fr", "SmartGen Educ").startswith("Bonjour/Bonsoir Mme Awa")


def test_language_resolution():
    assert normalize_language("en-US,en;q=0.9") == "en"
    assert normalize_language("de") == "fr"
    assert normalize_language(None) == "fr"
    assert t("validation.payment_amount", "fr", name="Alpha") == "Veuillez saisir le montant du paiement pour Alpha"


def test_build_sitemap():
    xml = build_sitemap([3, 8], "https://smartgen-educ.com/", today=date(2025, 5, 1))
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<loc>https://smartgen-educ.com/</loc>" in xml
    assert "<loc>https://smartgen-educ.com/teachers/8</loc>" in xml
    assert xml.count("<url>") == len(STATIC_ROUTES) + 2
    assert xml.count("<priority>1.0</priority>") == 1
    assert "<lastmod>2025-05-01</lastmod>" in xml


def test_sitemap_endpoint_lists_approved_teachers(client, make_teacher):
    shown = make_teacher(user="shown")
    hidden = make_teacher(user="hidden", is_approved=False)

    r = client.get("/sitemap.xml")
    assert r.headers["content-type"].startswith("application/xml")
    assert f"/teachers/{shown.id}</loc>" in r.text
    assert f"/teachers/{hidden.id}</loc>" not in r.text


def test_record_visit(client):
    r = client.post("/visits", json={"visitor_id": "abc-123", "location": "Douala, CM"})
    assert r.status_code == 201
    assert r.json()["visitor_id"] == "abc-123"


def test_root(client):
    assert client.get("/").json() == {"message": "SmartGen Educ backend is running!"}
