from .service import WhatsAppService, WhatsAppDeliveryError

__all__ = ['WhatsAppService', 'WhatsAppDeliveryError']
