"""
Write public/sitemap.xml from the approved teachers in the database.

    python scripts/generate_sitemap.py [output_path]
"""
import logging
import sys
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import SessionLocal
from app.logging_config import setup_logging
from app.models import comment, payment, student, student_teacher_relation, teacher  # noqa: F401
from app.routers.sitemap import approved_teacher_ids
from app.utils.sitemap import build_sitemap

logger = logging.getLogger("app.sitemap")

DEFAULT_OUTPUT = Path("public") / "sitemap.xml"


def main(argv=None) -> int:
    setup_logging()
    argv = sys.argv[1:] if argv is None else argv
    output = Path(argv[0]) if argv else DEFAULT_OUTPUT

    db = SessionLocal()
    try:
        teacher_ids = approved_teacher_ids(db)
    except SQLAlchemyError:
        logger.exception("Could not load teachers for the sitemap")
        return 1
    finally:
        db.close()

    xml = build_sitemap(teacher_ids, settings.SITE_BASE_URL)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(xml, encoding="utf-8")
    except OSError:
        logger.exception("Could not write %s", output)
        return 1

    logger.info("Sitemap written to %s with %s teacher pages", output, len(teacher_ids))
    return 0


if __name__ == "__main__":
    sys.exit(main())
