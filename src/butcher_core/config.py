"""Butcher registry configuration.

The registry is the read-only lookup of vendor type, assigned categories,
commission/markup rates and sheet tabs. It is an immutable value passed
explicitly into the reconciliation and analytics entry points, so tests can
substitute their own fixtures.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from butcher_core.butchers import BUTCHERS, CATEGORY_NAMES, FISH_CATEGORIES, MEAT_CATEGORIES
from butcher_core.cleaning import leading_number
from butcher_core.exceptions import ConfigError

logger = logging.getLogger(__name__)

BUTCHER_TYPES = ("meat", "fish", "mixed")


def _freeze_rates(butcher_id: str, kind: str, rates: Any) -> Mapping[str, float]:
    if rates is None:
        return MappingProxyType({})
    if not isinstance(rates, Mapping):
        raise ConfigError(f"{kind} for butcher '{butcher_id}' must be a mapping")
    frozen: dict[str, float] = {}
    for category, value in rates.items():
        rate = leading_number(value)
        if rate is None or not 0 <= rate <= 1:
            raise ConfigError(
                f"Invalid {kind} {value!r} for butcher '{butcher_id}', category '{category}'. "
                f"Rates must be decimals between 0 and 1."
            )
        frozen[str(category)] = rate
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class ButcherConfig:
    """Configuration of one butcher stall.

    Attributes:
        id: Vendor id (e.g. "usaj").
        name: Display name.
        type: "meat", "fish" or "mixed".
        categories: Assigned category ids (e.g. "chicken", "sea-water-fish").
        commission_rates: Category display name -> commission rate (decimal).
        markup_rates: Category display name -> markup rate (decimal).
        order_sheet_tab: Tab holding this stall's orders.
        meat_sheet_tab: Menu tab for meat prices, if any.
        fish_sheet_tab: Menu tab for fish prices, if any.
    """

    id: str
    name: str
    type: str
    categories: tuple[str, ...] = ()
    commission_rates: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    markup_rates: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    order_sheet_tab: Optional[str] = None
    meat_sheet_tab: Optional[str] = None
    fish_sheet_tab: Optional[str] = None

    @property
    def category_names(self) -> list[str]:
        """Display names of the assigned categories (unknown ids pass through)."""
        return [CATEGORY_NAMES.get(category_id, category_id) for category_id in self.categories]

    @classmethod
    def from_mapping(cls, butcher_id: str, data: Mapping[str, Any]) -> ButcherConfig:
        """Build a ButcherConfig from a dict with snake_case or camelCase keys.

        Raises:
            ConfigError: If the type is unknown or a rate is outside [0, 1].
        """
        butcher_type = str(data.get("type", "")).lower()
        if butcher_type not in BUTCHER_TYPES:
            raise ConfigError(
                f"Butcher '{butcher_id}' has invalid type {data.get('type')!r}. "
                f"Must be one of {', '.join(BUTCHER_TYPES)}."
            )

        def get(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return None

        return cls(
            id=butcher_id,
            name=str(data.get("name") or butcher_id),
            type=butcher_type,
            categories=tuple(str(c) for c in (data.get("categories") or ())),
            commission_rates=_freeze_rates(
                butcher_id, "commission rate", get("commission_rates", "commissionRates")
            ),
            markup_rates=_freeze_rates(
                butcher_id, "markup rate", get("markup_rates", "markupRates")
            ),
            order_sheet_tab=get("order_sheet_tab", "orderSheetTab"),
            meat_sheet_tab=get("meat_sheet_tab", "meatSheetTab"),
            fish_sheet_tab=get("fish_sheet_tab", "fishSheetTab"),
        )


def item_type_for_category(category_name: str) -> Optional[str]:
    """Return "meat" or "fish" for a category display name, else None."""
    if category_name in MEAT_CATEGORIES:
        return "meat"
    if category_name in FISH_CATEGORIES:
        return "fish"
    return None


class ButcherRegistry:
    """Immutable lookup of butcher configurations by id.

    Example:
        >>> from butcher_core.config import DEFAULT_REGISTRY
        >>> DEFAULT_REGISTRY.butcher_type("kak")
        'fish'
        >>> DEFAULT_REGISTRY.categories("usaj")
        ['Chicken', 'Beef']
        >>> DEFAULT_REGISTRY.get("nobody") is None
        True

    """

    def __init__(self, configs: Mapping[str, ButcherConfig]) -> None:
        self._configs: Mapping[str, ButcherConfig] = MappingProxyType(dict(configs))

    def __contains__(self, butcher_id: object) -> bool:
        return butcher_id in self._configs

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def get(self, butcher_id: Optional[str]) -> Optional[ButcherConfig]:
        """Return the configuration for ``butcher_id`` or None."""
        if butcher_id is None:
            return None
        return self._configs.get(butcher_id)

    def butcher_type(self, butcher_id: Optional[str]) -> Optional[str]:
        config = self.get(butcher_id)
        return config.type if config else None

    def butcher_name(self, butcher_id: Optional[str]) -> Optional[str]:
        config = self.get(butcher_id)
        return config.name if config else None

    def categories(self, butcher_id: Optional[str]) -> list[str]:
        """Category display names assigned to a butcher; [] when unknown."""
        config = self.get(butcher_id)
        return config.category_names if config else []

    def price_sheet_tab(self, butcher_id: str, category_name: str) -> Optional[str]:
        """Menu tab holding purchase prices for a butcher and item category.

        Meat and fish stalls have a single tab; mixed stalls pick the tab by
        the category's item type.
        """
        config = self.get(butcher_id)
        if config is None:
            return None
        if config.type == "meat":
            return config.meat_sheet_tab
        if config.type == "fish":
            return config.fish_sheet_tab
        item_type = item_type_for_category(category_name)
        if item_type == "meat":
            return config.meat_sheet_tab
        if item_type == "fish":
            return config.fish_sheet_tab
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> ButcherRegistry:
        """Build a registry from ``{butcher_id: {...config...}}``."""
        return cls(
            {str(butcher_id): ButcherConfig.from_mapping(str(butcher_id), rec)
             for butcher_id, rec in data.items()}
        )

    @classmethod
    def from_json(cls, path: str | Path) -> ButcherRegistry:
        """Load a registry from a JSON file shaped like ``butcher_core.butchers.BUTCHERS``.

        Raises:
            ConfigError: If the file cannot be read or parsed, or an entry is invalid.
        """
        if isinstance(path, str):
            path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load butcher registry from {path}: {e}") from e
        if not isinstance(data, Mapping):
            raise ConfigError(f"Butcher registry {path} must contain a JSON object")
        registry = cls.from_mapping(data)
        logger.info("Loaded %d butcher configuration(s) from %s", len(registry), path)
        return registry


DEFAULT_REGISTRY = ButcherRegistry.from_mapping(BUTCHERS)
