"""
FastAPI app assembly: logging, middleware, exception handlers and router
wiring.
"""
import logging
import os
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from location_admin import __version__
from location_admin.api.cities import router as cities_router
from location_admin.api.responses import ResponseEnvelope
from location_admin.db.database import get_db
from location_admin.events import default_listeners
from location_admin.exceptions import ContentEditVetoed, NotFoundError

# Database schema is managed by Alembic migrations.

ADMIN_PATH_PREFIX = os.getenv("ADMIN_PATH_PREFIX", "/admin").rstrip("/")

app = FastAPI(
    title="Location Admin Service",
    description="Admin endpoints for managing cities of the location plugin.",
    version=__version__,
)

# Listener registry used to seed each request's notifier
app.state.content_listeners = default_listeners()

_default_origins = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
]
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()] or _default_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info("not_found: path=%s %s", request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=404)


@app.exception_handler(ContentEditVetoed)
async def edit_vetoed_handler(request: Request, exc: ContentEditVetoed):
    logger.info("edit_vetoed: path=%s reason=%s", request.url.path, exc.reason)
    return ResponseEnvelope().set_error().set_message(exc.reason).set_code(403).to_response()


app.include_router(cities_router, prefix=ADMIN_PATH_PREFIX)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}
