"""
Payroll Report Backend - Main Application

Technician payroll reporting for a field-service dashboard.
Reads completed HouseCall Pro jobs from Supabase and serves per-technician summaries.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os
import logging

from app.config import get_settings
from app.routers import payroll

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting Payroll Report Backend...")
    yield
    logger.info("Shutting down Payroll Report Backend...")


# Initialize FastAPI app
app = FastAPI(
    title="Payroll Report Backend",
    description="Technician payroll summaries from synced HouseCall Pro jobs",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(payroll.router, prefix="/api/payroll", tags=["Payroll"])


@app.get("/")
def read_root():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "Payroll Report Backend",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Detailed health check"""
    settings = get_settings()
    return {
        "status": "healthy",
        "supabase_configured": bool(settings.supabase_url and settings.supabase_key),
        "jobs_table": settings.jobs_table,
        "payroll_statuses": settings.payroll_statuses,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=True)
