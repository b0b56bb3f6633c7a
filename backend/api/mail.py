"""
Mail API Routes

Submits mail through the outgoing pipeline. Encryption for recipients
who asked for it happens transparently inside the pipeline.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, EmailStr, Field

from api.dependencies import MailerDep, TokenDep
from mail_gate import MailAddress

logger = logging.getLogger(__name__)
router = APIRouter()


class AddressModel(BaseModel):
    address: EmailStr
    name: str = ""

    def to_mail_address(self) -> MailAddress:
        return MailAddress(address=str(self.address), name=self.name)


class SendMailRequest(BaseModel):
    sender: AddressModel
    to: List[AddressModel] = Field(min_length=1)
    subject: str
    body: str
    html_body: Optional[str] = None


class SendMailResponse(BaseModel):
    success: bool
    sent: List[str] = []
    failed: List[str] = []
    error: Optional[str] = None


@router.post("/send", response_model=SendMailResponse)
async def send_mail(request: SendMailRequest, response: Response, token: TokenDep, mailer: MailerDep):
    """
    Send a mail.

    A rejected send answers 400. The error text is only present when the
    sender mailed themselves.
    """
    body = request.body
    if request.html_body is not None:
        body = {"text": request.body, "html": request.html_body}

    result = await mailer.send(
        to=[t.to_mail_address() for t in request.to],
        sender=request.sender.to_mail_address(),
        subject=request.subject,
        body=body,
    )

    if not result.ok:
        response.status_code = status.HTTP_400_BAD_REQUEST

    return SendMailResponse(
        success=result.ok,
        sent=result.sent,
        failed=result.failed,
        error=result.error,
    )
