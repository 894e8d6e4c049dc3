"""
Daylight API
============
FastAPI application entry point. Mount routers and error handlers here.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.errors import MoodTrackerError
from app.routers import account, moods

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Daylight API",
    description="Daily mood tracking API Backend",
    version="0.1.0",
    docs_url="/api/docs" if settings.environment != "production" else None,
    redoc_url="/api/redoc" if settings.environment != "production" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(account.router)
app.include_router(moods.router)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

@app.exception_handler(MoodTrackerError)
async def mood_tracker_error_handler(request: Request, exc: MoodTrackerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.debug("Rejected request to %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "message": "Invalid request.",
                "code": "validation_error",
                "errors": errors,
            }
        },
    )


# ---------------------------------------------------------------------------
# Service endpoints
# ---------------------------------------------------------------------------

@app.get("/api")
async def welcome() -> dict:
    return {"message": "Welcome to the Daylight App API!"}


@app.get("/api/data")
async def server_time() -> dict:
    return {"currentTime": datetime.now(timezone.utc).isoformat()}


@app.get("/api/health")
async def health_check() -> dict:
    return {"status": "ok", "service": "daylight-api"}
