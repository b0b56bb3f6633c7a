"""
GPGMail Backend - Main Application Entry Point

Host side of the outgoing mail pipeline. Mail to users who opted in to
encryption is encrypted with their OpenPGP key before it leaves.

Security Notes:
- Binds to 127.0.0.1 only (no external access)
- All endpoints except /health require bearer token authentication
- Failed encryption never falls back to plaintext
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from api import auth, mail, preferences
from config import settings
from email_service import SmtpTransport, UserMailer
from mail_gate import create_hooks
from preferences import MemoryPreferenceStore

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting GPGMail Backend v%s", settings.app_version)
    logger.info("Binding to %s:%d (localhost only)", settings.host, settings.port)

    app.state.preferences = MemoryPreferenceStore()
    app.state.hooks = create_hooks(settings, app.state.preferences)
    app.state.mailer = UserMailer(app.state.hooks, SmtpTransport())
    logger.info("Mail hooks registered, relaying via %s:%d", settings.smtp_host, settings.smtp_port)

    yield

    logger.info("Shutting down GPGMail Backend")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="OpenPGP encryption for outgoing mail",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(preferences.router, prefix="/api/v1/preferences", tags=["Preferences"])
app.include_router(mail.router, prefix="/api/v1/mail", tags=["Mail"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "encryption_mode": "pgp_mime" if settings.use_pgp_mime else "inline",
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
