"""FastAPI application for the ahpra-check compliance service.

Provides REST API endpoints wrapping the ahpra_check package for:
- Content sanitization and AHPRA/TGA compliance checks
- Live-editor (real-time) compliance reports
- Security scanning of free text
- Structured field and form validation
- Analytics anonymization and the compliance audit log
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure the ahpra_check package is importable by adding the project root to sys.path.
_project_root = str(Path(__file__).resolve().parents[3])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ahpra_check import __version__
from web.backend.app.routers import audit, compliance, fields, privacy, validation

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(
    title="ahpra-check API",
    description=(
        "REST API for AHPRA/TGA healthcare content compliance. "
        "Provides endpoints for compliance checks, security scans, "
        "field and form validation, anonymization and audit history."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(compliance.router)
app.include_router(fields.router)
app.include_router(validation.router)
app.include_router(privacy.router)
app.include_router(audit.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "ahpra-check API",
        "version": __version__,
        "description": "AHPRA/TGA healthcare content compliance REST API",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
