from typing import Literal, Optional

from fastapi import Header, HTTPException, Query

from app.config import settings

Language = Literal["en", "fr"]
SUPPORTED = ("en", "fr")


MESSAGES: dict[str, dict[str, str]] = {
    # auth
    "auth.user_not_found": {"en": "User not found", "fr": "Utilisateur introuvable"},
    "auth.invalid_password": {"en": "Invalid password", "fr": "Mot de passe invalide"},
    "auth.guardian_mismatch": {
        "en": "Guardian name does not match",
        "fr": "Le nom du tuteur ne correspond pas",
    },
    "auth.admin_not_found": {"en": "Admin not found", "fr": "Administrateur introuvable"},
    "auth.invalid_token": {"en": "Invalid authentication token", "fr": "Jeton d'authentification invalide"},
    "auth.forbidden_role": {"en": "Access denied for this role", "fr": "Accès refusé pour ce rôle"},
    "auth.managers_only": {
        "en": "Only promoteur and chef coordonateur can perform this action",
        "fr": "Seuls le promoteur et le chef coordonateur peuvent effectuer cette action",
    },
    # validation
    "validation.missing_fields": {
        "en": "Missing required fields: {fields}",
        "fr": "Champs obligatoires manquants : {fields}",
    },
    "validation.password_too_short": {
        "en": "Password must be at least {min} characters",
        "fr": "Le mot de passe doit contenir au moins {min} caractères",
    },
    "validation.password_too_long": {
        "en": "Password too long (max 72 bytes)",
        "fr": "Mot de passe trop long (72 octets maximum)",
    },
    "validation.username_taken": {
        "en": "Username already used. Please choose another.",
        "fr": "Nom d'utilisateur déjà utilisé. Veuillez en choisir un autre.",
    },
    "validation.username_reserved": {
        "en": "Usernames in the ST00A1 / ST00F1 / ST00B1 form are reserved for students",
        "fr": "Les noms d'utilisateur du type ST00A1 / ST00F1 / ST00B1 sont réservés aux étudiants",
    },
    "validation.email_taken": {
        "en": "Email already used.",
        "fr": "Adresse e-mail déjà utilisée.",
    },
    "validation.no_teacher_selected": {
        "en": "Please select at least one teacher",
        "fr": "Veuillez sélectionner au moins un enseignant",
    },
    "validation.payment_amount": {
        "en": "Please enter payment amount for {name}",
        "fr": "Veuillez saisir le montant du paiement pour {name}",
    },
    "validation.image_url_required": {
        "en": "Image notices need an image URL",
        "fr": "Les annonces image nécessitent une URL d'image",
    },
    "validation.not_your_teacher": {
        "en": "You can only review your own teachers",
        "fr": "Vous ne pouvez évaluer que vos propres enseignants",
    },
    "validation.teacher_not_linked": {
        "en": "This teacher is not linked to the student",
        "fr": "Cet enseignant n'est pas lié à cet étudiant",
    },
    "validation.relation_exists": {
        "en": "This student is already linked to this teacher",
        "fr": "Cet étudiant est déjà lié à cet enseignant",
    },
    "validation.cannot_delete_self": {
        "en": "You cannot delete your own account",
        "fr": "Vous ne pouvez pas supprimer votre propre compte",
    },
    "validation.promoteur_only": {
        "en": "Only a promoteur can modify or delete a promoteur",
        "fr": "Seul un promoteur peut modifier ou supprimer un promoteur",
    },
    "validation.teacher_required": {
        "en": "A teacher is required for this message",
        "fr": "Un enseignant est requis pour ce message",
    },
    "validation.no_whatsapp": {
        "en": "No WhatsApp number configured",
        "fr": "Aucun numéro WhatsApp configuré",
    },
    # not found
    "not_found.teacher": {"en": "Teacher not found", "fr": "Enseignant introuvable"},
    "not_found.student": {"en": "Student not found", "fr": "Étudiant introuvable"},
    "not_found.payment": {"en": "Payment not found", "fr": "Paiement introuvable"},
    "not_found.notice": {"en": "Notice not found", "fr": "Annonce introuvable"},
    "not_found.admin": {"en": "Admin not found", "fr": "Administrateur introuvable"},
    "not_found.relation": {"en": "Relation not found", "fr": "Relation introuvable"},
    "not_found.company": {
        "en": "Company information not found",
        "fr": "Informations de l'entreprise introuvables",
    },
    # images
    "image.upload_failed": {
        "en": "Image upload failed: {reason}",
        "fr": "Échec du téléchargement de l'image : {reason}",
    },
}


def normalize_language(value: Optional[str]) -> str:
    """'fr-CM,fr;q=0.9,en;q=0.8' -> 'fr'. Unknown or empty -> the default."""
    if value:
        first = value.split(",")[0].split(";")[0].strip().lower()
        base = first.split("-")[0]
        if base in SUPPORTED:
            return base
    return settings.DEFAULT_LANGUAGE


def get_language(
    lang: Optional[str] = Query(None, description="en / fr"),
    accept_language: Optional[str] = Header(None),
) -> str:
    if lang:
        return normalize_language(lang)
    return normalize_language(accept_language)


def t(key: str, lang: str, **kwargs) -> str:
    entry = MESSAGES[key]
    text = entry.get(lang) or entry["en"]
    return text.format(**kwargs) if kwargs else text


def http_error(status_code: int, key: str, lang: str, **kwargs) -> HTTPException:
    return HTTPException(status_code=status_code, detail=t(key, lang, **kwargs))
