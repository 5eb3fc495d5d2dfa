"""Cocktail list and detail containers"""

from dataclasses import dataclass, field

from cocktail_api.exceptions import ClientValidationError
from state.lifecycle import ActionCreator, AsyncAction, FetchState, Slice, handles


async def _fetch_cocktails(arg, store):
    return await store.api.get_cocktails()


async def _fetch_cocktail_by_id(cocktail_id, store):
    if cocktail_id is None:
        raise ClientValidationError("Cocktail ID is required")
    return await store.api.get_cocktail(cocktail_id)


fetch_cocktails = AsyncAction("cocktails/fetch_cocktails", _fetch_cocktails)
fetch_cocktail_by_id = AsyncAction("cocktails/fetch_cocktail_by_id", _fetch_cocktail_by_id)

# Dispatched when a detail view closes so the next one never shows stale data
clear_detail = ActionCreator("cocktails/clear_detail")


@dataclass
class CocktailsState:
    list: FetchState = field(default_factory=lambda: FetchState(data=[]))
    detail: FetchState = field(default_factory=lambda: FetchState(data=None))


class CocktailsSlice(Slice):
    """All cocktails for browsing, plus the one open in detail"""

    name = "cocktails"
    tracks = {
        fetch_cocktails: "list",
        fetch_cocktail_by_id: "detail",
    }

    def initial_state(self) -> CocktailsState:
        return CocktailsState()

    @handles(clear_detail.type)
    def _clear_detail(self, state, action):
        state.detail.reset(None)
