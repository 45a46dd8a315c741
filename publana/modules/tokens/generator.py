"""Secure token generation with entropy-source fallback."""

import logging
import os
import random
import secrets
import string
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
TOKEN_LENGTH = TOKEN_BYTES * 2
PASSWORD_ALPHABET = string.ascii_letters + string.digits

EntropySource = Callable[[int], bytes]


def generate_password(length: int = TOKEN_LENGTH) -> str:
    """Alphanumeric password from the OS-backed SystemRandom."""
    rng = random.SystemRandom()
    return "".join(rng.choice(PASSWORD_ALPHABET) for _ in range(length))


class TokenGenerator:
    """
    Produces 64-character bearer tokens.

    Sources are tried in order; a source that raises NotImplementedError or
    OSError is skipped. When every byte source fails the generator falls back
    to an alphanumeric password of the same length.
    """

    def __init__(
        self,
        sources: Optional[Sequence[EntropySource]] = None,
        password_generator: Callable[[int], str] = generate_password,
    ):
        self.sources = list(sources) if sources is not None else [secrets.token_bytes, os.urandom]
        self.password_generator = password_generator

    def generate(self) -> str:
        """Return a new token. Does not persist it."""
        for source in self.sources:
            try:
                raw = source(TOKEN_BYTES)
            except (NotImplementedError, OSError) as e:
                logger.warning(f"Entropy source {getattr(source, '__name__', source)} unavailable: {e}")
                continue

            if len(raw) != TOKEN_BYTES or not any(raw):
                logger.warning("Entropy source returned unusable bytes, trying next source")
                continue

            return raw.hex()

        logger.warning("No byte entropy source available, falling back to password generator")
        return self.password_generator(TOKEN_LENGTH)
