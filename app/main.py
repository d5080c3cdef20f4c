"""EventPro – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.database import Base, engine
# Import models so Base.metadata has all tables before create_all
from app.models import User, Poll, Submission, BookingVenue, Booking, SiteSettings  # noqa: F401
from app.routers import auth, polls, results, public, booking_venues, bookings, site_settings

log = logging.getLogger("uvicorn.error")

settings = get_settings()
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(polls.router)
app.include_router(results.router)
app.include_router(public.router)
app.include_router(booking_venues.router)
app.include_router(bookings.router)
app.include_router(site_settings.router)

_scheduler = None


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = str(first.get("msg") or "Invalid request")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    if loc and first.get("type") == "missing":
        return f"{'.'.join(loc)} is required"
    return msg


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Something went wrong!"})


@app.on_event("startup")
def startup():
    global _scheduler
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        log.warning("Database startup failed (tables not created). Check DATABASE_URL. Error: %s", e)

    if settings.expiry_sweep_enabled:
        from apscheduler.schedulers.background import BackgroundScheduler
        from app.services.expiry import run_expiry_sweep_job
        _scheduler = BackgroundScheduler()
        _scheduler.add_job(
            run_expiry_sweep_job,
            "interval",
            seconds=settings.expiry_sweep_interval_seconds,
            max_instances=1,
            coalesce=True,
        )
        _scheduler.start()
        log.info("Expiry sweep scheduled every %ss", settings.expiry_sweep_interval_seconds)


@app.on_event("shutdown")
def shutdown():
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
