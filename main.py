"""
Minister Follow-Up Portal - FastAPI application
Main application entry point
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import RedirectResponse
import uvicorn

from app.core.config import settings
from app.api import routes_portal, routes_public
from app.services.sessions import portal_sessions

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info(f"Guest store at {settings.GUESTS_API_BASE_URL}")
    yield
    # Let dispatched follow-ups reach the store before exiting
    await portal_sessions.drain()
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Minister Follow-Up Portal",
    description="Follow-up questionnaire for first-time guests, filled in by the attending minister",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files
os.makedirs("static", exist_ok=True)
app.mount("/static", StaticFiles(directory="static"), name="static")

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_portal.router, prefix="/minister", tags=["portal"])
app.include_router(routes_portal.api_router, prefix="/minister/api", tags=["portal-api"])

@app.get("/")
async def root():
    """Send visitors to the portal"""
    return RedirectResponse(url="/minister")

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
