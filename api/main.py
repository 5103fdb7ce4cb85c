"""
Activity Lock API - Main Application.

FastAPI application serving the activity lock checks to webforms.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__

# Create FastAPI application
app = FastAPI(
    title="Activity Lock API",
    description="Locks webforms for visitors who already have a matching CRM activity",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Webforms are embedded on other sites, so the check endpoint is called cross-origin.
# TODO: Restrict origins to the configured webform hosts once they are listed in settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "activity-lock-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Activity Lock API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import activity_check, forms, options

app.include_router(activity_check.router, prefix="/api/v1", tags=["Activity Lock"])
app.include_router(forms.router, prefix="/api/v1", tags=["Forms"])
app.include_router(options.router, prefix="/api/v1", tags=["Options"])


if __name__ == "__main__":
    import os

    import uvicorn

    port = int(os.getenv("PORT", 8000))

    print("=" * 60)
    print("Activity Lock API")
    print("=" * 60)
    print(f"Check:   http://localhost:{port}/api/v1/activity-lock/check")
    print(f"Docs:    http://localhost:{port}/docs")
    print(f"Health:  http://localhost:{port}/health")
    print("=" * 60)

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=port,
        log_level="info"
    )
