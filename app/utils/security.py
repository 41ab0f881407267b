# app/utils/security.py
"""
Random tokens handed out to people and devices that act without logging in.
"""
import secrets
import string

INVITATION_TOKEN_ALPHABET = string.ascii_letters + string.digits
INVITATION_TOKEN_LENGTH = 32


def generate_invitation_token(length: int = INVITATION_TOKEN_LENGTH) -> str:
    """Alphanumeric token embedded in faculty response links."""
    return "".join(secrets.choice(INVITATION_TOKEN_ALPHABET) for _ in range(length))


def generate_station_token() -> str:
    """48 hex chars; authorizes a print station kiosk."""
    return secrets.token_hex(24)
