import logging

from shelfcast.services.rule_table import FALLBACK_HORIZON, HorizonPair, get_rule

logger = logging.getLogger(__name__)


def resolve(name: str, category: str) -> HorizonPair:
    """
    Resolve a horizon pair from the rule table.

    Unknown categories get FALLBACK_HORIZON. Otherwise the first keyword
    override (in authored order) contained in the lower-cased name wins,
    falling back to the category default.
    """
    rule = get_rule(category)
    if rule is None:
        logger.debug(f"No rule for category '{category}', using fallback horizon")
        return FALLBACK_HORIZON

    name_lower = name.lower()
    for keyword, horizon in rule.keyword_overrides:
        if keyword in name_lower:
            return horizon

    return rule.default
