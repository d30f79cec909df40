"""String collation keys for locale-aware ordering.

Sorting helpers take a ``CollationKey`` so the comparison primitive can be
swapped (tests pin ``default_collation_key``; deployments may prefer the
process locale through ``locale_collation_key``).
"""

from __future__ import annotations

import locale
import unicodedata
from collections.abc import Callable

CollationKey = Callable[[str], tuple]


def fold_accents(text: str) -> str:
    """Strip combining marks after NFKD decomposition (``"Émile"`` -> ``"Emile"``)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def default_collation_key(value: str | None) -> tuple:
    """Accent- and case-insensitive primary order, then case, then exact string.

    ``"alice" < "Bob" < "bob"``, ``"Émile" < "Zoe"``, and a string always
    sorts before any string it is a strict prefix of.
    """
    text = value or ""
    folded = text.casefold()
    return (fold_accents(folded), folded, text)


def locale_collation_key(value: str | None) -> tuple:
    """Collate with the active ``LC_COLLATE`` locale; exact string breaks ties."""
    text = value or ""
    return (locale.strxfrm(text), text)
