from passlib.context import CryptContext

from app.utils.i18n import http_error

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 4


def check_password_rules(password: str, lang: str = "en"):
    if len(password) < MIN_PASSWORD_LENGTH:
        raise http_error(400, "validation.password_too_short", lang, min=MIN_PASSWORD_LENGTH)
    if len(password.encode("utf-8")) > 72:
        raise http_error(400, "validation.password_too_long", lang)

def hash_password(password: str, lang: str = "en"):
    check_password_rules(password, lang)
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    # legacy plaintext rows are not a recognised hash and never verify
    if not hashed_password or pwd_context.identify(hashed_password) is None:
        return False
    if len(plain_password.encode("utf-8")) > 72:
        return False
    return pwd_context.verify(plain_password, hashed_password)
