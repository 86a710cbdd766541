"""Locale-aware title collation.

Titles are compared the way a person reading the list expects: case and
accents do not split the alphabet in two. ``configure_collation`` adopts the
collation order of the process environment (LC_ALL / LC_COLLATE / LANG);
``title_key`` folds case and strips accents before collating, so the order
stays alphabetical even when only the C locale is available.
"""

import locale
import logging
import unicodedata
from typing import Tuple

logger = logging.getLogger(__name__)


def configure_collation(name: str = '') -> bool:
    """Set LC_COLLATE for the process.

    Args:
        name: Locale name; the empty string selects the environment's locale

    Returns:
        True if the locale was applied, False if it is unavailable
    """
    try:
        applied = locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error as e:
        logger.warning(f"Cannot use collation locale {name or '(environment)'}: {e}; titles sort case-insensitively")
        return False
    logger.debug(f"Title collation locale: {applied}")
    return True


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def title_key(title: str) -> Tuple[str, str]:
    """Sort key for titles: folded text first, the exact title breaks ties.

    Example:
        >>> sorted(['Beta', 'alpha', 'Émile'], key=title_key)
        ['alpha', 'Beta', 'Émile']
    """
    return (locale.strxfrm(_fold(title)), locale.strxfrm(title))


def compare_titles(a: str, b: str) -> int:
    """Three-way comparison of two titles using title_key."""
    key_a, key_b = title_key(a), title_key(b)
    if key_a == key_b:
        return 0
    return -1 if key_a < key_b else 1
