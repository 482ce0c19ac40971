"""
Short code generation strategies for the shortlinks service.
Uses Strategy Pattern so the service does not depend on one algorithm.
"""

import secrets
import string
from abc import ABC, abstractmethod
from typing import Callable

from shortlinks_app.common.logging_config import get_logger

logger = get_logger(__name__)

# URL-safe alphabet: never needs escaping in a path segment
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, exists: Callable[[str], bool]) -> str:
        """
        Generate a short code.

        Args:
            exists: Predicate telling whether a code is already taken

        Returns:
            A short code, unique unless the strategy gave up
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation with collision checking.

    Draws a code from a cryptographic RNG and asks the store whether it is
    taken. On collision a new code is drawn, at most ``max_retries`` times.
    If every attempt collides the last code is returned anyway and the
    insert is left to fail on the unique constraint.
    """

    def __init__(self, length: int = 6, max_retries: int = 5, alphabet: str = URL_SAFE_ALPHABET):
        self.length = length
        self.max_retries = max_retries
        self.characters = alphabet

    def generate(self, exists: Callable[[str], bool]) -> str:
        """Generate random short code with collision checking"""
        short_code = self._generate_random_string()

        for attempt in range(self.max_retries):
            if not exists(short_code):
                return short_code
            logger.debug("Short code collision on attempt %d: %s", attempt + 1, short_code)
            short_code = self._generate_random_string()

        if exists(short_code):
            logger.warning(
                "Could not generate unique short code after %d attempts, using %s",
                self.max_retries, short_code
            )
        return short_code

    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(secrets.choice(self.characters) for _ in range(self.length))
