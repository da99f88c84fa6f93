"""
FastAPI server that exposes the SkillPath wizard as an HTTP API.

The frontend creates a wizard session, then drives it step by step: the
background form, the adaptive assessment, the skill analysis and finally the
published, shareable profile.

To run the server:
    python -m uvicorn skillpath.api.server:app --reload --app-dir src
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from skillpath.api.handlers.exceptions import (
    answer_rejected_handler,
    external_service_handler,
    session_not_found_handler,
    validation_exception_handler,
)
from skillpath.api.middleware.logging import log_requests_middleware
from skillpath.api.routes import profiles, wizard
from skillpath.config import settings
from skillpath.utils.exceptions import (
    AnswerRejected,
    ExternalServiceError,
    SessionNotFound,
)
from skillpath.utils.logger import configure_logging

# ------------- FastAPI Setup -------------

configure_logging()

# Create the FastAPI app
app = FastAPI(
    title="SkillPath Backend",
    description="API for the SkillPath career assessment wizard",
    version="1.0",
)

# Define the allowed origins for CORS
origins = [
    "http://localhost:5173",  # local development (Vite)
    "http://127.0.0.1:5173",  # local development (Vite)
    "http://localhost:3000",  # local development
]

# Add production frontend URL from environment variable if provided
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

# For development, allow all origins if no production URL is set
if not settings.FRONTEND_URL:
    origins.append("*")

# Add the CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.middleware("http")(log_requests_middleware)

# Add exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AnswerRejected, answer_rejected_handler)
app.add_exception_handler(SessionNotFound, session_not_found_handler)
app.add_exception_handler(ExternalServiceError, external_service_handler)

# Include routers
app.include_router(wizard.router)
app.include_router(profiles.router)


@app.get("/health")
def health() -> dict:
    """Liveness probe with the active integrations."""
    return {
        "status": "ok",
        "ai_enabled": settings.ai_enabled(),
        "remote_store_enabled": settings.remote_store_enabled(),
    }


# For running as standalone server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
