"""
Authentication API Routes

Exchanges the shared application secret for a short-lived bearer token.
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, HTTPException, status
from jose import jwt
from pydantic import BaseModel

from api.dependencies import TokenDep
from config import settings

logger = logging.getLogger(__name__)
router = APIRouter()


class TokenRequest(BaseModel):
    app_secret: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


@router.post("/token", response_model=TokenResponse)
async def create_token(request: TokenRequest):
    if not hmac.compare_digest(request.app_secret.encode(), settings.api_token.encode()):
        logger.warning("Token requested with invalid application secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid application secret",
        )

    expires = datetime.now(timezone.utc) + timedelta(minutes=settings.token_expire_minutes)
    token = jwt.encode(
        {"sub": "frontend", "exp": expires},
        settings.secret_key,
        algorithm="HS256",
    )
    return TokenResponse(
        access_token=token,
        expires_in=settings.token_expire_minutes * 60,
    )


@router.get("/status")
async def auth_status(token: TokenDep):
    return {"authenticated": True, "subject": token}
