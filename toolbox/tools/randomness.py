"""Random identifier generation."""

import secrets

from beartype import beartype

RANDOM_STRING_SOURCE = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_+"


@beartype
def random_string(n: int, alphabet: str = RANDOM_STRING_SOURCE) -> str:
    """Return ``n`` characters drawn from ``alphabet`` using the OS CSPRNG."""
    if n < 0:
        raise ValueError(f"length must be non-negative, got {n}")
    if not alphabet:
        raise ValueError("alphabet must not be empty")
    return "".join(secrets.choice(alphabet) for _ in range(n))
