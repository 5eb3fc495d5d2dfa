"""Favorites container"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from cocktail_api.exceptions import ClientValidationError
from state.lifecycle import ActionCreator, AsyncAction, FetchState, Slice, handles

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def cocktail_id_of(cocktail: Dict[str, Any]) -> Optional[int]:
    """Get the ID of a cocktail record, which some endpoints call ``id``"""
    cocktail_id = cocktail.get("cocktail_id")
    if cocktail_id is None:
        cocktail_id = cocktail.get("id")
    return cocktail_id


async def _fetch_favorites(user_id, store):
    if not user_id:
        raise ClientValidationError("User ID not found")
    return await store.api.get_favorites(user_id)


async def _add_favorite(arg, store):
    arg = arg or {}
    user_id = arg.get("user_id")
    cocktail = arg.get("cocktail") or {}
    if not user_id:
        raise ClientValidationError("User ID not found")

    cocktail_id = cocktail_id_of(cocktail)
    if cocktail_id is None:
        raise ClientValidationError("Cocktail ID is required")

    response = await store.api.add_favorite(user_id, cocktail_id)
    # The server copy is not merged; the cocktail already in memory is richer
    logger.debug(f"Favorite {cocktail_id} saved for user {user_id}: {response}")

    return {
        **cocktail,
        "cocktail_id": cocktail_id,
        "favorited_at": _utc_now_iso(),
    }


async def _remove_favorite(arg, store):
    arg = arg or {}
    user_id = arg.get("user_id")
    cocktail_id = arg.get("cocktail_id")
    if not user_id:
        raise ClientValidationError("User ID not found")
    if cocktail_id is None:
        raise ClientValidationError("Cocktail ID is required")

    await store.api.remove_favorite(user_id, cocktail_id)
    return cocktail_id


fetch_favorites = AsyncAction("favorites/fetch_favorites", _fetch_favorites)
add_favorite = AsyncAction("favorites/add_favorite", _add_favorite)
remove_favorite = AsyncAction("favorites/remove_favorite", _remove_favorite)

clear_favorites = ActionCreator("favorites/clear")


@dataclass
class FavoritesState:
    items: FetchState = field(default_factory=lambda: FetchState(data=[]))
    # Status of the latest add or remove
    mutation: FetchState = field(default_factory=lambda: FetchState(data=None))


class FavoritesSlice(Slice):
    """A user's favorite cocktails, unique by cocktail_id"""

    name = "favorites"
    tracks = {
        fetch_favorites: "items",
        add_favorite: "mutation",
        remove_favorite: "mutation",
    }

    def initial_state(self) -> FavoritesState:
        return FavoritesState()

    @handles(add_favorite.fulfilled)
    def _add_fulfilled(self, state, action):
        entry = action.payload
        if entry is None:
            return
        cocktail_id = cocktail_id_of(entry)
        items = state.items.data if state.items.data is not None else []
        if any(item.get("cocktail_id") == cocktail_id for item in items):
            return
        state.items.data = items + [entry]

    @handles(remove_favorite.fulfilled)
    def _remove_fulfilled(self, state, action):
        cocktail_id = action.payload
        items = state.items.data or []
        remaining = [item for item in items if item.get("cocktail_id") != cocktail_id]
        if len(remaining) != len(items):
            state.items.data = remaining

    @handles(clear_favorites.type)
    def _clear(self, state, action):
        state.items.reset([])
        state.mutation.reset(None)
