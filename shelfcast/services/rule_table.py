# shelfcast/services/rule_table.py
"""
Heuristic shelf-life / restock rules by category.

Each category carries a default horizon pair and an ORDERED list of
keyword overrides. The first keyword found in the item name wins, so the
order below is part of the data and must not be re-sorted.

All values are whole days: (shelf_life_days, restock_days).
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class HorizonPair:
    """Days from purchase until spoilage and until repurchase"""
    shelf_life_days: int
    restock_days: int


@dataclass(frozen=True)
class CategoryRule:
    category: str
    default: HorizonPair
    keyword_overrides: Tuple[Tuple[str, HorizonPair], ...] = ()


def _rule(category: str, default: Tuple[int, int], *overrides: Tuple[str, int, int]) -> CategoryRule:
    return CategoryRule(
        category=category,
        default=HorizonPair(*default),
        keyword_overrides=tuple(
            (keyword, HorizonPair(shelf_life, restock))
            for keyword, shelf_life, restock in overrides
        )
    )


# Used when a category has no rule at all
FALLBACK_HORIZON = HorizonPair(shelf_life_days=30, restock_days=30)

CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    _rule(
        "Produce", (5, 7),
        ("apple", 14, 14),
        ("banana", 7, 7),
        ("lettuce", 5, 7),
        ("spinach", 3, 7),
        ("tomato", 7, 10),
        ("avocado", 5, 7),
        ("carrot", 21, 14),
        ("onion", 30, 21),
        ("potato", 30, 21),
    ),
    _rule(
        "Dairy", (7, 10),
        ("milk", 7, 7),
        ("cheese", 14, 14),
        ("yogurt", 14, 10),
        ("butter", 30, 30),
        ("eggs", 25, 14),
        ("cream", 5, 10),
    ),
    _rule(
        "Meat", (2, 7),
        ("chicken", 2, 7),
        ("beef", 3, 10),
        ("pork", 3, 10),
        ("fish", 1, 7),
        ("ground", 1, 7),
        ("frozen", 90, 30),
    ),
    _rule(
        "Pantry", (180, 60),
        ("bread", 7, 7),
        ("pasta", 365, 90),
        ("rice", 365, 90),
        ("cereal", 60, 30),
        ("flour", 180, 90),
        ("oil", 365, 180),
        ("canned", 730, 90),  # capped to 365 downstream
    ),
    _rule(
        "Frozen", (90, 30),
        ("ice cream", 60, 30),
        ("vegetables", 180, 60),
        ("fruit", 180, 60),
        ("pizza", 90, 30),
    ),
    _rule(
        "Beverages", (90, 30),
        ("juice", 7, 14),
        ("soda", 90, 30),
        ("water", 365, 30),
        ("coffee", 180, 60),
        ("tea", 365, 90),
    ),
    _rule(
        "Household", (365, 90),
        ("paper", 365, 60),
        ("detergent", 365, 90),
        ("soap", 365, 60),
    ),
    _rule(
        "Personal Care", (365, 90),
        ("toothpaste", 730, 90),
        ("shampoo", 365, 90),
        ("deodorant", 365, 90),
    ),
    _rule(
        "Baby", (30, 14),
        ("formula", 30, 14),
        ("diapers", 365, 30),
        ("food", 14, 14),
    ),
    _rule(
        "Pet", (90, 30),
        ("food", 90, 30),
        ("treats", 180, 60),
        ("litter", 365, 30),
    ),
)

_RULES_BY_CATEGORY: Dict[str, CategoryRule] = {rule.category: rule for rule in CATEGORY_RULES}


def get_rule(category: str) -> Optional[CategoryRule]:
    """Exact lookup on the authored category name"""
    return _RULES_BY_CATEGORY.get(category)


def categories() -> Tuple[str, ...]:
    return tuple(rule.category for rule in CATEGORY_RULES)
