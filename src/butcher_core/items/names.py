"""Item name normalization.

Fish stalls label items in a three-language format, "Local - English - Script"
(e.g. "Ayala - Mackerel - അയല"), while meat stalls use plain English names.
Every aggregation keys items by the English segment, called the canonical name.
"""

from __future__ import annotations

from typing import Any

NAME_SEPARATOR = " - "

OTHER_CATEGORY = "other"

# Checked in order; first keyword hit wins
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("chicken", ("chicken",)),
    ("mutton", ("mutton", "lamb")),
    ("beef", ("beef",)),
    ("seawater fish", ("seawater", "king fish", "ayakoora")),
    ("freshwater fish", ("freshwater", "pond")),
)


def canonical_name(raw: Any) -> str:
    """Return the canonical (English) name of an item label.

    Args:
        raw: Item label as recorded upstream. Non-strings are converted with
            ``str``; None becomes an empty string.

    Returns:
        The middle segment (stripped) of a three-language composite, otherwise
        the label stripped.

    Examples:
        >>> canonical_name("Ayala - Mackerel - അയല")
        'Mackerel'
        >>> canonical_name("  chicken leg ")
        'chicken leg'
        >>> canonical_name("Mackerel - Ayala")
        'Mackerel - Ayala'
    """
    if raw is None:
        return ""
    text = raw if isinstance(raw, str) else str(raw)
    if NAME_SEPARATOR in text:
        parts = text.split(NAME_SEPARATOR)
        if len(parts) >= 3:
            return parts[1].strip()
    return text.strip()


def infer_category(item_name: Any) -> str:
    """Guess an item's category from keywords in its canonical name.

    Examples:
        >>> infer_category("Chicken Breast Boneless")
        'chicken'
        >>> infer_category("Aykora - King Fish - അയ്‌കോറ")
        'seawater fish'
        >>> infer_category("Squid")
        'other'
    """
    name = canonical_name(item_name).lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return OTHER_CATEGORY
