"""
Módulo de email: entrega SMTP con templates Jinja2.
"""

from .service import EmailService, EmailDeliveryError

__all__ = ['EmailService', 'EmailDeliveryError']
