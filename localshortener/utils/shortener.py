"""Shortcode generation utility

This module provides a helper function for generating random shortcodes which
don't collide with the shortcodes already stored in the registry.

Functions:
    generate_shortcode(taken, length=6, rng=None, max_attempts=1000):
        Draw a random Base62 shortcode not contained in `taken`.

Example:
    >>> from localshortener.utils import generate_shortcode
    >>> generate_shortcode({'abc123'})
    'Xq3mT0'
"""

import random
from collections.abc import Container

from localshortener.constants import ALPHABET, Limits
from localshortener.exceptions import ShortcodeGenerationError


def generate_shortcode(
    taken: Container[str],
    length: int = Limits.GENERATED_SHORTCODE_LENGTH,
    rng: random.Random | None = None,
    max_attempts: int = Limits.MAX_SHORTCODE_ATTEMPTS,
) -> str:
    """Generate a random shortcode which isn't already taken.

    Every character is drawn uniformly from the 62-character alphabet
    (a-z, A-Z, 0-9), and the draw is repeated until the result is not in
    `taken`. With 62^6 (~5.7e10) possible codes, a retry is already rare at
    realistic registry sizes; `max_attempts` only bounds the pathological case
    of a (nearly) saturated space.

    Args:
        taken (Container[str]):
            Shortcodes that must not be returned (e.g. the registry's keys).

        length (int, optional):
            Length of the shortcode. Defaults to 6.

        rng (random.Random, optional):
            Random number generator, injectable for deterministic tests.
            Defaults to the module-level generator.

        max_attempts (int, optional):
            Maximum number of draws before giving up. Defaults to 1000.

    Returns:
        str: A shortcode of `length` alphanumeric characters not in `taken`.

    Raises:
        ValueError:
            If `length` or `max_attempts` is not positive.
        ShortcodeGenerationError:
            If every attempt collided.

    NOTE:
        - This is not a cryptographically secure generator; shortcodes are
          identifiers, not secrets.
    """
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if max_attempts <= 0:
        raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

    choices = (rng or random).choices
    for _ in range(max_attempts):
        shortcode = ''.join(choices(ALPHABET, k=length))
        if shortcode not in taken:
            return shortcode

    raise ShortcodeGenerationError(f'Could not generate a free shortcode after {max_attempts} attempts.')
