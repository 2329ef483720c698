"""Static butcher configuration table.

Category ids, display names and the per-stall commission/markup rates used
when no registry file is supplied. Rates are decimals (0.07 == 7%).
"""

# Category id -> display name; rate maps are keyed by display name
CATEGORY_NAMES = {
    "chicken": "Chicken",
    "mutton": "Mutton",
    "beef": "Beef",
    "sea-water-fish": "Sea Water Fish",
    "fresh-water-fish": "Fresh Water Fish",
    "steak-fish": "Steak Fish",
}

MEAT_CATEGORIES = ["Chicken", "Mutton", "Beef"]
FISH_CATEGORIES = ["Sea Water Fish", "Fresh Water Fish", "Steak Fish"]

_FISH_IDS = ["sea-water-fish", "fresh-water-fish", "steak-fish"]

BUTCHERS = {
    "usaj": {
        "name": "Usaj Meat Hub",
        "type": "meat",
        "categories": ["chicken", "beef"],
        "commission_rates": {"Chicken": 0.10, "Beef": 0.10},
        "markup_rates": {"Chicken": 0.05, "Beef": 0.00},
        "order_sheet_tab": "Usaj_Meat_Hub",
        "meat_sheet_tab": "Usaj_Meat_Hub",
    },
    "usaj_mutton": {
        "name": "Usaj Mutton Shop",
        "type": "meat",
        "categories": ["mutton"],
        "commission_rates": {"Mutton": 0.08},
        "markup_rates": {"Mutton": 0.00},
        "order_sheet_tab": "Usaj_Mutton_Shop",
        "meat_sheet_tab": "Usaj_Mutton_Shop",
    },
    "pkd": {
        "name": "PKD Stall",
        "type": "meat",
        "categories": ["chicken", "mutton"],
        "commission_rates": {"Chicken": 0.10, "Mutton": 0.10},
        "markup_rates": {"Chicken": 0.05, "Mutton": 0.00},
        "order_sheet_tab": "PKD_Stall",
        "meat_sheet_tab": "PKD_Stall",
    },
    "kak": {
        "name": "KAK",
        "type": "fish",
        "categories": _FISH_IDS,
        "commission_rates": {name: 0.07 for name in FISH_CATEGORIES},
        "markup_rates": {name: 0.05 for name in FISH_CATEGORIES},
        "order_sheet_tab": "KAK",
        "fish_sheet_tab": "KAK",
    },
    "ka_sons": {
        "name": "KA Sons",
        "type": "fish",
        "categories": _FISH_IDS,
        "commission_rates": {name: 0.07 for name in FISH_CATEGORIES},
        "markup_rates": {name: 0.05 for name in FISH_CATEGORIES},
        "order_sheet_tab": "KA_Sons",
        "fish_sheet_tab": "KA_Sons",
    },
    "alif": {
        "name": "Alif",
        "type": "fish",
        "categories": _FISH_IDS,
        "commission_rates": {name: 0.10 for name in FISH_CATEGORIES},
        "markup_rates": {name: 0.05 for name in FISH_CATEGORIES},
        "order_sheet_tab": "Alif",
        "fish_sheet_tab": "Alif",
    },
    "test_meat": {
        "name": "Test Meat Butcher",
        "type": "meat",
        "categories": ["chicken", "mutton"],
        "commission_rates": {"Chicken": 0.10, "Mutton": 0.10},
        "markup_rates": {"Chicken": 0.05, "Mutton": 0.00},
        "order_sheet_tab": "Test_Meat_Butcher",
        "meat_sheet_tab": "Test_Meat_Butcher",
    },
    "test_fish": {
        "name": "Test Fish Butcher",
        "type": "fish",
        "categories": _FISH_IDS,
        "commission_rates": {name: 0.07 for name in FISH_CATEGORIES},
        "markup_rates": {name: 0.05 for name in FISH_CATEGORIES},
        "order_sheet_tab": "Test_Fish_Butcher",
        "fish_sheet_tab": "Test_Fish_Butcher",
    },
    "tender_chops": {
        "name": "Tender Chops",
        "type": "mixed",
        "categories": ["chicken", "mutton", "beef"] + _FISH_IDS,
        "commission_rates": {name: 0.08 for name in MEAT_CATEGORIES + FISH_CATEGORIES},
        "markup_rates": {
            "Chicken": 0.05,
            "Mutton": 0.00,
            "Beef": 0.05,
            "Sea Water Fish": 0.05,
            "Fresh Water Fish": 0.05,
            "Steak Fish": 0.05,
        },
        "order_sheet_tab": "Tender_Chops",
        "meat_sheet_tab": "Tender_Chops_Meat",
        "fish_sheet_tab": "Tender_Chops_Fish",
    },
}
