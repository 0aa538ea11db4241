import re
from typing import Optional
from urllib.parse import quote

WA_BASE_URL = "https://wa.me"
COUNTRY_CODE = "237"
MAX_CONTACT_LENGTH = 13  # "+237" + 9 digits


def normalize_phone(value: Optional[str]) -> str:
    """
    Cameroon numbers as stored on teacher contacts:
    "6 59 82 17 31" -> "+237659821731", "237659821731" -> "+237659821731"
    """
    digits = re.sub(r"\D", "", value or "")
    if not digits:
        return ""
    if not digits.startswith(COUNTRY_CODE):
        digits = COUNTRY_CODE + digits
    return f"+{digits}"[:MAX_CONTACT_LENGTH]


def build_link(phone: str, message: str) -> str:
    # wa.me wants the bare international number, no "+" or spaces
    digits = re.sub(r"\D", "", phone or "")
    return f"{WA_BASE_URL}/{digits}?text={quote(message, safe='')}"


COMPANY_MESSAGES = {
    "home_tutoring": {
        "en": "Hello, I'd like to request a home tutor for my child. Can you provide more information?",
        "fr": "Bonjour, je voudrais un répétiteur à domicile pour mon enfant. Pouvez-vous me fournir plus d'informations?",
    },
    "online_courses": {
        "en": "Hello, I'm interested in your online courses. Can you send me details?",
        "fr": "Bonjour, je suis intéressé par vos cours en ligne. Pouvez-vous m'envoyer des détails?",
    },
    "vip_tutoring": {
        "en": "Hello, I'd like information about your VIP tutoring services",
        "fr": "Bonjour, je voudrais des informations sur vos services de tutorat VIP",
    },
    "no_tutor_in_area": {
        "en": "Hello, I'm looking for a home tutor but I can't find one in my area. Can you help me?",
        "fr": "Bonjour, je cherche un répétiteur à domicile mais je n'en trouve pas dans ma zone. Pouvez-vous m'aider ?",
    },
    "teacher_interest": {
        "en": "Hello, I'm interested in home classes with {teacher_name}",
        "fr": "Bonjour, je suis intéressé par des cours à domicile avec {teacher_name}",
    },
    "default": {
        "en": "Hello, I'd like information about {company_name} services",
        "fr": "Bonjour, je voudrais des informations sur les services {company_name}",
    },
}

COMPANY_TOPICS = tuple(COMPANY_MESSAGES)


def company_message(topic: str, lang: str, company_name: str, teacher_name: Optional[str] = None) -> str:
    # unknown topics fall back to the generic enquiry
    entry = COMPANY_MESSAGES.get(topic) or COMPANY_MESSAGES["default"]
    text = entry["en"] if lang == "en" else entry["fr"]
    return text.format(company_name=company_name, teacher_name=teacher_name or "")


def teacher_contact_message(full_name: str, gender: str, lang: str, company_name: str) -> str:
    """Formal 'a family is interested' message sent by staff to a tutor."""
    if lang == "en":
        title = "Mr." if gender == "male" else "Mrs./Ms."
        return (
            f"Hello {title} {full_name},\n\n"
            "A family is interested in your services as a home tutor. "
            "Are you free to handle the work?\n\n"
            "Please let us know your availability.\n\n"
            f"Best regards,\n{company_name} Team"
        )
    title = "M." if gender == "male" else "Mme"
    return (
        f"Bonjour/Bonsoir {title} {full_name},\n\n"
        "Une famille est intéressée par vos services en tant que professeur à domicile. "
        "Êtes-vous libre pour prendre en charge ce travail ?\n\n"
        "Veuillez nous faire savoir votre disponibilité.\n\n"
        f"Cordialement,\nÉquipe {company_name}"
    )
