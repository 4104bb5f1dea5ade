"""FastAPI application entry point."""

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from albumcat.dependencies import get_db
from albumcat.log import configure_logging
from albumcat.settings import settings

# Import all routers
from albumcat.routers import albums, photos, tags

app = FastAPI(
    title=settings.app_name,
    description="Photo album catalog with search, gallery ordering and filter menus",
    version="0.1.0"
)
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def setup_logging():
    configure_logging()


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures surface as 503 without leaking driver details."""
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


# Add CORS middleware
_allowed_origins = [settings.app_url]
if settings.is_development:
    # Allow any localhost port during local development
    _allowed_origins += [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count", "Link", "X-Albumcat-Warning", "Location"],
)

# Register all routers
app.include_router(albums.router)
app.include_router(photos.router)
app.include_router(tags.router)


# Health check endpoint
@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with DB connectivity verification."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy"}
    except SQLAlchemyError:
        logger.exception("Health check failed")
        raise HTTPException(status_code=503, detail="Database unavailable")
