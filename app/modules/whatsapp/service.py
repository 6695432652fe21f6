"""
Envío de mensajes de WhatsApp vía Twilio
"""
import logging
from typing import Optional

from twilio.rest import Client

from app.core.config import Settings
from app.common.validators import format_whatsapp_number

logger = logging.getLogger(__name__)


class WhatsAppDeliveryError(Exception):
    """Twilio rechazó o no pudo entregar el mensaje."""


class WhatsAppService:
    """
    Cliente de WhatsApp construido una vez por proceso.

    Se puede inyectar un cliente de Twilio ya creado. Sin credenciales funciona
    en modo desarrollo: registra el mensaje en el log y lo da por enviado.
    """

    def __init__(self, settings: Settings, client: Optional[Client] = None):
        self.from_number = settings.TWILIO_WHATSAPP_FROM
        self.country_code = settings.DEFAULT_COUNTRY_CODE
        self.workshop_name = settings.WORKSHOP_NAME
        self.configured = settings.twilio_configured or client is not None
        if client is None and settings.twilio_configured:
            client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        self.client = client

    def send_message(self, to_phone_number: str, message: str) -> str:
        """
        Enviar un mensaje y devolver el SID de Twilio.
        Lanza WhatsAppDeliveryError si falla.
        """
        to_number = format_whatsapp_number(to_phone_number, self.country_code)
        if not to_number:
            raise WhatsAppDeliveryError("Phone number is empty")

        if not self.configured:
            logger.info(f"[dev mode] WhatsApp to {to_number}:\n{message}")
            return "dev-mode"

        from_number = self.from_number
        if from_number.startswith("whatsapp:"):
            from_number = from_number[len("whatsapp:"):]

        try:
            message_obj = self.client.messages.create(
                body=message,
                from_=f"whatsapp:{from_number}",
                to=f"whatsapp:{to_number}",
            )
        except Exception as e:
            logger.error(f"Failed to send WhatsApp message to {to_number}: {str(e)}")
            raise WhatsAppDeliveryError(str(e)) from e

        logger.info(f"WhatsApp message sent to {to_number} (sid={message_obj.sid})")
        return message_obj.sid
