"""
Validadores de teléfono y email para clientes del taller
"""
import re
from typing import Optional

from app.core.config import settings


def clean_phone(phone: str) -> str:
    """Quita espacios, guiones y paréntesis."""
    return re.sub(r'[\s\-\(\)]', '', phone or '')


def validate_phone(phone: str) -> bool:
    """
    Valida un número de teléfono.
    Acepta dígitos con un '+' opcional al inicio, entre 7 y 15 dígitos.
    """
    return bool(re.match(r'^\+?[0-9]{7,15}$', clean_phone(phone)))


def format_whatsapp_number(phone: str, country_code: Optional[str] = None) -> str:
    """
    Normaliza un número al formato internacional que espera WhatsApp.

    - 03001234567  -> +923001234567
    - 923001234567 -> +923001234567
    - 3001234567   -> +923001234567
    - +923001234567 se deja igual
    """
    code = (country_code or settings.DEFAULT_COUNTRY_CODE).lstrip('+')
    cleaned = clean_phone(phone)
    if not cleaned:
        return cleaned
    if cleaned.startswith('+'):
        return cleaned
    if cleaned.startswith('0'):
        return f"+{code}{cleaned[1:]}"
    if cleaned.startswith(code):
        return f"+{cleaned}"
    return f"+{code}{cleaned}"


def initials(name: str) -> str:
    parts = [p for p in (name or '').split() if p]
    return ''.join(p[0].upper() for p in parts[:2])
