import importlib.util
from pathlib import Path

import pytest
from sqlalchemy.exc import SQLAlchemyError

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "generate_sitemap.py"


@pytest.fixture
def generate_sitemap():
    spec = importlib.util.spec_from_file_location("generate_sitemap", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_writes_sitemap_with_approved_teachers(generate_sitemap, make_teacher, tmp_path):
    shown = make_teacher(user="a")
    hidden = make_teacher(user="b", is_approved=False)
    output = tmp_path / "public" / "sitemap.xml"

    assert generate_sitemap.main([str(output)]) == 0

    xml = output.read_text(encoding="utf-8")
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert f"https://smartgen-educ.com/teachers/{shown.id}</loc>" in xml
    assert f"/teachers/{hidden.id}</loc>" not in xml


def test_database_failure_exits_1(generate_sitemap, monkeypatch, tmp_path):
    def _down(db):
        raise SQLAlchemyError("database is locked")
    monkeypatch.setattr(generate_sitemap, "approved_teacher_ids", _down)

    output = tmp_path / "sitemap.xml"
    assert generate_sitemap.main([str(output)]) == 1
    assert not output.exists()


def test_unwritable_output_exits_1(generate_sitemap, tmp_path):
    blocker = tmp_path / "public"
    blocker.write_text("not a directory")

    assert generate_sitemap.main([str(blocker / "sitemap.xml")]) == 1
