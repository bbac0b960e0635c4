"""Slug generation utilities."""

import secrets
import string
from typing import Optional


# Digits and letters minus the characters that are easy to confuse
# when read aloud or typed by hand: 0 O o 1 l I.
SLUG_ALPHABET = "".join(
    c for c in string.digits + string.ascii_uppercase + string.ascii_lowercase
    if c not in "0Oo1lI"
)

DEFAULT_SLUG_LENGTH = 7


class SlugGenerator:
    """Generate short random slugs.

    The generator does not know about the store; uniqueness is enforced by
    the caller retrying on collision.
    """

    def __init__(self, length: int = DEFAULT_SLUG_LENGTH, alphabet: str = SLUG_ALPHABET):
        """Initialize slug generator.

        Args:
            length: Number of characters in every generated slug
            alphabet: Characters slugs are drawn from
        """
        if length < 1:
            raise ValueError("Slug length must be positive")
        if len(set(alphabet)) < 2:
            raise ValueError("Slug alphabet needs at least two distinct characters")

        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        """Generate a random slug.

        Returns:
            Slug of exactly ``self.length`` characters
        """
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))

    def is_valid_slug(self, slug: Optional[str]) -> bool:
        """Check whether a value could have been produced by this generator.

        Args:
            slug: Value to check

        Returns:
            True if it has the configured length and alphabet
        """
        if not isinstance(slug, str) or len(slug) != self.length:
            return False
        return all(c in self.alphabet for c in slug)

    @property
    def id_space(self) -> int:
        """Number of distinct slugs this generator can produce."""
        return len(self.alphabet) ** self.length
