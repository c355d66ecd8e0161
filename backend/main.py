# backend/main.py
import logging
import logging.config
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

load_dotenv()

from config import settings
from database import SessionLocal, engine, init_db
from utils.bootstrap import seed_users_from_file
from utils.exceptions import InternalError, PortalError, ValidationError

# Routers
from routes.auth import router as auth_router
from routes.attendance import router as attendance_router
from routes.reviews import router as reviews_router
from routes.admin import router as admin_router
from routes.stats import router as stats_router
from routes.logs import router as logs_router

logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"default": {"format": settings.LOG_FORMAT}},
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {"level": settings.LOG_LEVEL, "handlers": ["default"]},
})
logger = logging.getLogger(__name__)


# Create tables and bootstrap the predefined accounts before serving
def startup():
    init_db()
    if not settings.SEED_ON_STARTUP:
        return

    db = SessionLocal()
    try:
        seed_users_from_file(db, settings.SEED_USERS_FILE)
    except FileNotFoundError:
        logger.warning("Seed file %s not found, skipping account bootstrap", settings.SEED_USERS_FILE)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup()
    yield


app = FastAPI(title="Attendance Portal API", version="1.0.0", lifespan=lifespan)

# CORS: the session cookie requires credentialed requests
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_validation_messages(exc: RequestValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = [str(v) for v in err.get("loc", []) if str(v) not in {"body", "query", "path"}]
        field = ".".join(loc) if loc else "field"
        err_type = str(err.get("type", ""))
        message = str(err.get("msg", "Invalid value"))

        if err_type == "missing":
            messages.append(f"{field} is required")
        else:
            messages.append(f"{field}: {message}")

    # Preserve order while de-duplicating.
    return list(dict.fromkeys(messages))


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = _format_validation_messages(exc)
    error = ValidationError(
        messages[0] if messages else "Validation failed",
        extra={"errors": messages},
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Router registration
app.include_router(auth_router)
app.include_router(attendance_router)
app.include_router(reviews_router)
app.include_router(admin_router)
app.include_router(stats_router)
app.include_router(logs_router)


@app.get("/")
def read_root():
    return {"message": "Attendance Portal API is running"}


@app.get("/health")
def health_check():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Health check failed: %s", e)
        return JSONResponse(status_code=503, content={"message": "Service unavailable"})
    return {"status": "healthy", "database": "connected"}
