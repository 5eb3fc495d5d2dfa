"""Read-only views over the root state"""

from collections import OrderedDict
from typing import Any, Dict, List, Optional

from state.lifecycle import AsyncStatus
from state.store import RootState
from state.ui import ThemeMode
from utils.helpers import group_matches, localized_field


# --- Cocktails ---

def select_all_cocktails(state: RootState) -> List[Dict[str, Any]]:
    return state.cocktails.list.data


def get_cocktails_list_status(state: RootState) -> AsyncStatus:
    return state.cocktails.list.status


def get_cocktails_list_error(state: RootState) -> Optional[str]:
    return state.cocktails.list.error


def select_detailed_cocktail(state: RootState) -> Optional[Dict[str, Any]]:
    return state.cocktails.detail.data


def get_detailed_cocktail_status(state: RootState) -> AsyncStatus:
    return state.cocktails.detail.status


def get_detailed_cocktail_error(state: RootState) -> Optional[str]:
    return state.cocktails.detail.error


def select_cocktail_by_id(state: RootState, cocktail_id: int) -> Optional[Dict[str, Any]]:
    """
    Find a cocktail in the loaded list (not the detail view)

    Args:
        state: Root state
        cocktail_id: ID to look up

    Returns:
        The cocktail record, or None when it is not in the list
    """
    for cocktail in state.cocktails.list.data or []:
        if cocktail.get("cocktail_id") == cocktail_id:
            return cocktail
    return None


def select_cocktails_by_ids(state: RootState, cocktail_ids: List[int]) -> List[Dict[str, Any]]:
    """Resolve an ID selection to full cocktails, in list order"""
    wanted = set(cocktail_ids or [])
    return [c for c in state.cocktails.list.data or [] if c.get("cocktail_id") in wanted]


def select_cocktail_name(cocktail: Optional[Dict[str, Any]], locale: Optional[str]) -> str:
    return localized_field(cocktail, "name", locale)


# --- Ingredients ---

def select_all_ingredients(state: RootState) -> List[Dict[str, Any]]:
    return state.ingredients.data


def get_ingredients_status(state: RootState) -> AsyncStatus:
    return state.ingredients.status


def get_ingredients_error(state: RootState) -> Optional[str]:
    return state.ingredients.error


def select_ingredients_by_category(state: RootState, locale: Optional[str]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Group the ingredient catalog under localized category names

    Args:
        state: Root state
        locale: Active locale tag

    Returns:
        Category name -> ingredients, categories in first-seen order
    """
    groups: Dict[str, List[Dict[str, Any]]] = OrderedDict()
    for ingredient in state.ingredients.data or []:
        category = localized_field(ingredient, "category_name", locale)
        groups.setdefault(category, []).append(ingredient)
    return groups


# --- Barmen ---

def select_search_results(state: RootState) -> List[Dict[str, Any]]:
    return state.barmen.search.data


def get_search_status(state: RootState) -> AsyncStatus:
    return state.barmen.search.status


def get_search_error(state: RootState) -> Optional[str]:
    return state.barmen.search.error


def select_result_sections(state: RootState) -> List[Dict[str, Any]]:
    """Search results split into ready / almost / explore sections"""
    return group_matches(state.barmen.search.data or [])


def select_hints(state: RootState) -> Any:
    return state.barmen.hints.data


def get_hints_status(state: RootState) -> AsyncStatus:
    return state.barmen.hints.status


def select_guide_step1(state: RootState) -> List[Dict[str, Any]]:
    return state.barmen.guide_step1.data


def select_guide_step2(state: RootState) -> List[Dict[str, Any]]:
    return state.barmen.guide_step2.data


def select_guide_step3(state: RootState) -> List[Dict[str, Any]]:
    return state.barmen.guide_step3.data


def get_guide_status(state: RootState, step: int) -> AsyncStatus:
    return getattr(state.barmen, f"guide_step{step}").status


def get_guide_error(state: RootState, step: int) -> Optional[str]:
    return getattr(state.barmen, f"guide_step{step}").error


# --- Roulette ---

def select_roulette_pool(state: RootState) -> List[Dict[str, Any]]:
    return state.roulette.pool.data


def get_roulette_status(state: RootState) -> AsyncStatus:
    return state.roulette.pool.status


def get_roulette_error(state: RootState) -> Optional[str]:
    return state.roulette.pool.error


def select_roulette_winner(state: RootState) -> Optional[Dict[str, Any]]:
    return state.roulette.winner


# --- Favorites ---

def select_all_favorites(state: RootState) -> List[Dict[str, Any]]:
    return state.favorites.items.data


def get_favorites_status(state: RootState) -> AsyncStatus:
    return state.favorites.items.status


def get_favorites_error(state: RootState) -> Optional[str]:
    return state.favorites.items.error


def select_is_favorite(state: RootState, cocktail_id: int) -> bool:
    return any(item.get("cocktail_id") == cocktail_id for item in state.favorites.items.data or [])


# --- User ---

def select_current_user(state: RootState) -> Optional[Dict[str, Any]]:
    return state.user.current_user


def select_user_id(state: RootState) -> Optional[Any]:
    user = state.user.current_user
    return user.get("id") if user else None


def select_is_guest(state: RootState) -> bool:
    return state.user.is_guest


def select_is_authenticated_or_guest(state: RootState) -> bool:
    return bool(state.user.current_user) or state.user.is_guest


def select_is_pro(state: RootState) -> bool:
    user = state.user.current_user
    return bool(user and user.get("is_pro"))


def get_login_status(state: RootState) -> AsyncStatus:
    return state.user.login.status


def get_is_auth_loading(state: RootState) -> bool:
    return state.user.is_auth_loading


# --- UI ---

def select_language(state: RootState) -> str:
    return state.ui.language


def select_theme_mode(state: RootState) -> ThemeMode:
    return state.ui.theme_mode


def select_effective_theme(state: RootState, system_scheme: Optional[str] = None) -> ThemeMode:
    """
    Resolve the theme to render

    Args:
        state: Root state
        system_scheme: Platform color scheme ("light" or "dark"), if known

    Returns:
        ThemeMode.LIGHT or ThemeMode.DARK
    """
    mode = state.ui.theme_mode
    if mode == ThemeMode.SYSTEM:
        return ThemeMode.DARK if system_scheme == "dark" else ThemeMode.LIGHT
    return mode
