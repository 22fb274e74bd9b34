"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before importing modules that read env vars at import time
load_dotenv()

# main.py is at <root>/src/api/main.py
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.routes import health, viewer
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import get_mongodb_client

setup_structured_logging()

logger = logging.getLogger(__name__)

# Version lives in pyproject.toml
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "TinyHouse Viewer API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    if get_mongodb_client():
        logger.info("MongoDB reachable at startup")
    else:
        logger.warning("MongoDB unavailable at startup, requests will return 503 until it is")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Viewer API - Google login, session cookies and Stripe Connect linking",
    version=VERSION,
    lifespan=lifespan,
)

# The session cookie only travels cross-origin with credentials enabled,
# which browsers refuse for a wildcard origin.
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'); the session cookie will not be sent cross-origin. "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(viewer.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Application logs already cover requests
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
