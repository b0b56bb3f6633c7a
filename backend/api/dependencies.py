import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from jose import JWTError, jwt

from config import settings
from email_service import UserMailer
from mail_gate import MailHooks
from preferences import MemoryPreferenceStore

logger = logging.getLogger(__name__)


async def verify_api_token(
    authorization: Annotated[str | None, Header()] = None
) -> str:
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = parts[1]

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=["HS256"],
        )
        return payload.get("sub", "frontend")
    except JWTError as e:
        logger.warning("Invalid token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_preference_store(request: Request) -> MemoryPreferenceStore:
    return request.app.state.preferences


def get_mail_hooks(request: Request) -> MailHooks:
    return request.app.state.hooks


def get_mailer(request: Request) -> UserMailer:
    return request.app.state.mailer


TokenDep = Annotated[str, Depends(verify_api_token)]
PreferencesDep = Annotated[MemoryPreferenceStore, Depends(get_preference_store)]
HooksDep = Annotated[MailHooks, Depends(get_mail_hooks)]
MailerDep = Annotated[UserMailer, Depends(get_mailer)]
