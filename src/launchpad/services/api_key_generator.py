"""
API key generation.

Keys are 32 random bytes written in base62, so they are URL safe and
always the same length.
"""

import secrets

from launchpad.core.constants import API_KEY_BYTES, API_KEY_LENGTH, BASE62_ALPHABET


def bytes_to_base62(data: bytes, length: int = API_KEY_LENGTH) -> str:
    """Encode bytes as base62, left-padded with the zero digit to length."""
    number = int.from_bytes(data, "big")
    digits = []
    while number > 0:
        number, remainder = divmod(number, 62)
        digits.append(BASE62_ALPHABET[remainder])

    encoded = "".join(reversed(digits))
    return encoded.rjust(length, BASE62_ALPHABET[0])


def generate_api_key() -> str:
    """Generate a new secret API key."""
    return bytes_to_base62(secrets.token_bytes(API_KEY_BYTES))
