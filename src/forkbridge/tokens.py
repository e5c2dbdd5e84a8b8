"""Random strings for the OAuth ``state`` round trip."""

import secrets
import string

_ALPHABET = string.ascii_letters + string.digits


def create_random_string(length: int = 32) -> str:
    """Return a URL-safe random string of ``length`` alphanumeric characters."""
    if length < 1:
        raise ValueError(f"length must be positive, got {length}")
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
