# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine
from app.models import (  # noqa: F401  registers every table on Base.metadata
    admin as admin_model,
    comment,
    company_info,
    notice,
    payment,
    student,
    student_teacher_relation,
    teacher,
    visit,
)
from app.routers import (
    auth, teachers, admin_teachers, admin_students, admin_relations, payments,
    students, notices, company, admins, dashboard, exports, uploads, visits, sitemap,
)

import time
import logging
from fastapi import Request
from app.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("app")


# create tables if missing
Base.metadata.create_all(bind=engine)

app = FastAPI(title="SmartGen Educ Backend", version="1.0.0")

origins = settings.cors_origins


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(teachers.router)
app.include_router(admin_teachers.router)
app.include_router(admin_students.router)
app.include_router(admin_relations.router)
app.include_router(payments.router)
app.include_router(students.router)
app.include_router(notices.router)
app.include_router(company.router)
app.include_router(admins.router)
app.include_router(dashboard.router)
app.include_router(exports.router)
app.include_router(uploads.router)
app.include_router(visits.router)
app.include_router(sitemap.router)

@app.get("/")
def root():
    return {"message": "SmartGen Educ backend is running!"}
