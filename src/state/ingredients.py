"""Ingredient catalog container"""

from state.lifecycle import AsyncAction, FetchState, Slice


async def _fetch_ingredients(arg, store):
    return await store.api.get_ingredients()


fetch_ingredients = AsyncAction("ingredients/fetch_ingredients", _fetch_ingredients)


class IngredientsSlice(Slice):
    """Categorized pantry ingredients, loaded once per session"""

    name = "ingredients"
    tracks = {fetch_ingredients: None}

    def initial_state(self) -> FetchState:
        return FetchState(data=[])
