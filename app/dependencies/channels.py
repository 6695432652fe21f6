from fastapi import Depends, Request
from typing import Annotated

from app.modules.email.service import EmailService
from app.modules.whatsapp.service import WhatsAppService
from app.modules.realtime.manager import ConnectionManager


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_whatsapp_service(request: Request) -> WhatsAppService:
    return request.app.state.whatsapp_service


def get_realtime(request: Request) -> ConnectionManager:
    return request.app.state.realtime


email_dependency = Annotated[EmailService, Depends(get_email_service)]
whatsapp_dependency = Annotated[WhatsAppService, Depends(get_whatsapp_service)]
realtime_dependency = Annotated[ConnectionManager, Depends(get_realtime)]
