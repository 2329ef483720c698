"""Item-level normalization: canonical names, categories and weights.

Example:
    >>> from butcher_core.items import canonical_name, to_kilograms
    >>> canonical_name("Mathi - Sardine - മത്തി")
    'Sardine'
    >>> to_kilograms("750g")
    0.75
"""

from butcher_core.items.names import canonical_name, infer_category
from butcher_core.items.weights import (
    item_weight_kg,
    order_weight,
    preparing_weight,
    to_kilograms,
)

__all__ = [
    "canonical_name",
    "infer_category",
    "item_weight_kg",
    "order_weight",
    "preparing_weight",
    "to_kilograms",
]
