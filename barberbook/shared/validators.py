"""Shared validation utilities"""

import re
import unicodedata
import uuid
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")


def validate_uuid(value: str) -> bool:
    """Validate UUID format"""
    try:
        uuid.UUID(value)
        return True
    except (ValueError, AttributeError):
        return False


def validate_br_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Brazilian phone number.

    Args:
        phone: Phone number string in various formats, with or without country code

    Returns:
        Digits only, area code included, without country code (10 or 11 digits)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)

    # Strip +55 prefix
    if digits.startswith("55") and len(digits) in (12, 13):
        digits = digits[2:]

    if len(digits) not in (10, 11):
        raise ValueError("Phone number must have 10 or 11 digits including area code")

    return digits


def to_whatsapp_number(phone: Optional[str]) -> Optional[str]:
    """Format a phone number for the WhatsApp gateway (digits with 55 country code)"""
    if not phone:
        return None
    digits = re.sub(r"\D", "", phone)
    if len(digits) in (10, 11):
        digits = f"55{digits}"
    return digits or None


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_time(value: Optional[str]) -> Optional[str]:
    """Validate a HH:MM (or HH:MM:SS) time string and return it as HH:MM"""
    if value is None:
        return value
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value[:5]


def validate_hex_color(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    if not re.match(r"^#[0-9a-fA-F]{6}$", value):
        raise ValueError("Color must be in #RRGGBB format")
    return value


def slugify(name: str) -> str:
    """
    Build a URL slug from a barbershop name.

    Accents are stripped ("Barbearia do João" -> "barbearia-do-joao").
    """
    normalized = unicodedata.normalize("NFKD", name)
    ascii_name = normalized.encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-")
    return slug or "barbearia"
