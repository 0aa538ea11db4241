from datetime import date
from io import BytesIO
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer

LABELS = {
    "title_one": {"en": "Teacher Information", "fr": "Informations de l'Enseignant"},
    "title_all": {"en": "All Teachers Information", "fr": "Informations de Tous les Enseignants"},
    "student": {"en": "Student", "fr": "Étudiant"},
    "student_id": {"en": "Student ID", "fr": "ID Étudiant"},
    "downloaded": {"en": "Downloaded on", "fr": "Téléchargé le"},
    "teacher_name": {"en": "Name of Teacher", "fr": "Nom de L'enseignant"},
    "email": {"en": "Email", "fr": "Email"},
    "phone": {"en": "Phone", "fr": "Téléphone"},
    "experience": {"en": "Experience", "fr": "Expérience"},
    "years": {"en": "years", "fr": "ans"},
    "diploma": {"en": "Diploma", "fr": "Diplôme"},
    "subjects": {"en": "Subjects", "fr": "Matières"},
    "locations": {"en": "Teaching Locations", "fr": "Lieux d'enseignement"},
    "days": {"en": "Available Days", "fr": "Jours disponibles"},
    "about": {"en": "About", "fr": "À propos"},
    "reviews": {"en": "Reviews", "fr": "Avis"},
}


def _label(key: str, lang: str) -> str:
    return LABELS[key]["en" if lang == "en" else "fr"]


def _line(styles, label: str, value) -> Paragraph:
    return Paragraph(f"<b>{escape(label)}:</b> {escape(str(value if value not in (None, '') else 'N/A'))}", styles["Normal"])


def _teacher_story(teacher, lang: str, styles) -> list:
    story = [
        Paragraph(escape(teacher.full_name), styles["Heading2"]),
        _line(styles, _label("teacher_name", lang), teacher.full_name),
        _line(styles, _label("email", lang), teacher.email),
        _line(styles, _label("phone", lang), teacher.contact),
        _line(styles, _label("experience", lang), f"{teacher.years_experience or 0} {_label('years', lang)}"),
        _line(styles, _label("diploma", lang), teacher.highest_diploma),
        _line(styles, _label("subjects", lang), ", ".join(teacher.subjects or [])),
        _line(styles, _label("locations", lang), ", ".join(teacher.location or [])),
        _line(styles, _label("days", lang), ", ".join(teacher.available_days or [])),
    ]
    if teacher.about_me:
        story.append(_line(styles, _label("about", lang), teacher.about_me))
    story.append(_line(styles, _label("reviews", lang), teacher.number_reviews or 0))
    story.append(Spacer(1, 12))
    return story


def teachers_pdf_bytes(student, teachers: Iterable, lang: str = "fr", today: Optional[date] = None) -> bytes:
    """One sheet per teacher, headed with the student's name and id."""
    teachers = list(teachers)
    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, title="SmartGen Educ")
    styles = getSampleStyleSheet()

    title_key = "title_one" if len(teachers) == 1 else "title_all"
    story = [
        Paragraph(escape(_label(title_key, lang)), styles["Title"]),
        Spacer(1, 12),
        _line(styles, _label("student", lang), student.full_name),
        _line(styles, _label("student_id", lang), student.identifier),
        _line(styles, _label("downloaded", lang), (today or date.today()).isoformat()),
        Spacer(1, 18),
    ]

    for i, teacher in enumerate(teachers):
        if i > 0:
            story.append(PageBreak())
        story.extend(_teacher_story(teacher, lang, styles))

    doc.build(story)
    return buf.getvalue()
