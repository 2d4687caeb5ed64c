from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from lms_backend.api.v1 import auth

# --- OWNER ROUTES ---
from lms_backend.api.v1.owner import chapter, courses, lesson, stores

# --- FILE ROUTES ---
from lms_backend.api.v1.shares import upload
from lms_backend.core.scheduler import scheduler, start_scheduler
from lms_backend.core.settings import settings
from lms_backend.db.init_db import create_all
from lms_backend.db.session import engine
from lms_backend.libs.response import validation_error_response
from lms_backend.schemas.shares.base import EnvelopeResponse
from lms_backend.services.shares.notification import get_email_outbox


@asynccontextmanager
async def lifespan(app: FastAPI):

    # ================================
    # 1) DATABASE SCHEMA
    # ================================
    if settings.DB_AUTO_CREATE:
        await create_all(engine)

    # ================================
    # 2) EMAIL OUTBOX
    # ================================
    outbox = get_email_outbox()
    await outbox.start()

    # ================================
    # 3) START APSCHEDULER
    # ================================
    start_scheduler()

    try:
        yield
    finally:
        # ================================
        # 4) STOP SCHEDULER
        # ================================
        try:
            scheduler.shutdown(wait=False)
            logger.info("🛑 Scheduler stopped")
        except Exception as e:
            logger.warning(f"⚠ Scheduler shutdown error: {e}")

        # ================================
        # 5) DRAIN EMAIL OUTBOX + DB POOL
        # ================================
        await outbox.stop()
        await engine.dispose()
        logger.info("🛑 Database pool closed")


# ===== APP CONFIG =====
app = FastAPI(
    title="LMS Backend",
    description="Courses, stores, chapters, lessons and account sessions",
    version="0.1.0",
    lifespan=lifespan,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


# ===== VALIDATION ERRORS =====
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # structural errors are a normal response with the envelope filled in
    body = EnvelopeResponse(base=validation_error_response(exc.errors()))
    return JSONResponse(status_code=200, content=body.model_dump(mode="json"))


prefix = "/api/v1"

# ===== REGISTER ROUTERS =====
app.include_router(auth.router, prefix=prefix)

# --- OWNER ROUTES ---
app.include_router(courses.router, prefix=prefix)
app.include_router(stores.router, prefix=prefix)
app.include_router(chapter.router, prefix=prefix)
app.include_router(lesson.router, prefix=prefix)

# --- FILE ROUTES ---
app.include_router(upload.router)


# ===== ROOT =====
@app.get("/")
async def hello_world():
    return {"message": "Hello world"}


if __name__ == "__main__":
    uvicorn.run(
        "lms_backend.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info"
    )
