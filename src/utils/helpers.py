"""Utility functions for localized cocktail data"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"

# (title, lowest missing_count, highest missing_count or None for no limit)
MATCH_TIERS: List[Tuple[str, int, Optional[int]]] = [
    ("ready", 0, 0),
    ("almost", 1, 2),
    ("explore", 3, None),
]


def normalize_locale(locale: Optional[str]) -> str:
    """
    Reduce a locale tag to its two letter language code

    Args:
        locale: Locale tag such as "tr-TR", "en_US" or "de"

    Returns:
        Language code, "en" when the tag is empty
    """
    if not locale:
        return FALLBACK_LOCALE
    return locale.strip()[:2].lower() or FALLBACK_LOCALE


def resolve_localized(value: Any, locale: Optional[str]) -> str:
    """
    Pick the text for the active locale from a localized field

    Lookup order is the exact language, then English, then an empty string.

    Args:
        value: Mapping of language code to text, or a plain string
        locale: Active locale tag

    Returns:
        Text to display
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return str(value)

    lang = normalize_locale(locale)
    text = value.get(lang)
    if text:
        return text
    return value.get(FALLBACK_LOCALE) or ""


def localized_field(record: Optional[Dict[str, Any]], field: str, locale: Optional[str]) -> str:
    """
    Resolve one localized field of a record

    Args:
        record: Cocktail, ingredient or guide option record
        field: Field name, e.g. "name" or "instructions"
        locale: Active locale tag

    Returns:
        Text to display, empty when the record or field is missing
    """
    if not record:
        return ""
    return resolve_localized(record.get(field), locale)


def match_tier(missing_count: Optional[int]) -> str:
    """
    Classify a recipe match by how many ingredients are missing

    Args:
        missing_count: Missing ingredient count; None counts as 0

    Returns:
        "ready", "almost" or "explore"
    """
    missing = missing_count or 0
    for title, low, high in MATCH_TIERS:
        if missing >= low and (high is None or missing <= high):
            return title
    return MATCH_TIERS[-1][0]


def group_matches(matches: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Group recipe matches into result sections

    Args:
        matches: Cocktails with a missing_count

    Returns:
        Non-empty sections in tier order, each {"title": ..., "data": [...]}
    """
    buckets: Dict[str, List[Dict[str, Any]]] = {title: [] for title, _, _ in MATCH_TIERS}
    for match in matches or []:
        buckets[match_tier(match.get("missing_count"))].append(match)

    return [
        {"title": title, "data": buckets[title]}
        for title, _, _ in MATCH_TIERS
        if buckets[title]
    ]


def toggle_id(selection: List[Any], item_id: Any) -> List[Any]:
    """Add an ID to a selection, or remove it if already present"""
    if item_id in selection:
        return [i for i in selection if i != item_id]
    return selection + [item_id]
