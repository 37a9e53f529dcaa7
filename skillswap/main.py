# skillswap/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skillswap.config import settings
from skillswap.database import Base, engine
from skillswap.api import (
    admin,
    announcement,
    auth,
    availability,
    report,
    review,
    search,
    skill,
    swap_request,
    users,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="SkillSwap API")

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ======================
# ERROR HANDLERS
# ======================

def _format_validation_errors(exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _format_validation_errors(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# API routers; search must precede users so /users/search wins over /users/{user_id}
app.include_router(auth.router, prefix="/api")          # /api/auth/*
app.include_router(search.router, prefix="/api")        # /api/users/search
app.include_router(users.router, prefix="/api")         # /api/users/*
app.include_router(skill.router, prefix="/api")         # /api/skills/*
app.include_router(availability.router, prefix="/api")  # /api/availability
app.include_router(swap_request.router, prefix="/api")  # /api/swap-requests/*
app.include_router(review.router, prefix="/api")        # /api/reviews/*
app.include_router(report.router, prefix="/api")        # /api/reports
app.include_router(announcement.router, prefix="/api")  # /api/announcements
app.include_router(admin.router, prefix="/api")         # /api/admin/*


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "SkillSwap API is running",
        "version": "1.0.0",
    }
