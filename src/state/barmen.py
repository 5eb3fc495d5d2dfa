"""Recipe matching and guide wizard containers"""

from dataclasses import dataclass, field

from cocktail_api.exceptions import ClientValidationError
from state.lifecycle import ActionCreator, AsyncAction, FetchState, Slice, handles

DEFAULT_MATCH_MODE = "flexible"


async def _find_recipes(arg, store):
    arg = arg or {}
    return await store.api.find_recipes(
        list(arg.get("inventory_ids") or []),
        mode=arg.get("mode") or DEFAULT_MATCH_MODE,
    )


async def _fetch_menu_hints(base_spirit_ids, store):
    return await store.api.get_menu_hints(list(base_spirit_ids or []))


async def _fetch_guide_step1(lang, store):
    return await store.api.get_guide_step1(lang)


async def _fetch_guide_step2(arg, store):
    family = (arg or {}).get("family")
    if not family:
        raise ClientValidationError("Pick a spirit family first")
    return await store.api.get_guide_step2(family, lang=arg.get("lang"))


async def _fetch_guide_step3(arg, store):
    family = (arg or {}).get("family")
    if not family:
        raise ClientValidationError("Pick a spirit family first")
    return await store.api.get_guide_step3(
        family,
        list(arg.get("step2_ids") or []),
        lang=arg.get("lang"),
    )


async def _fetch_wizard_results(arg, store):
    family = (arg or {}).get("family")
    if not family:
        raise ClientValidationError("Pick a spirit family first")
    return await store.api.get_guide_results(family, list(arg.get("selected_ids") or []))


find_recipes = AsyncAction("barmen/find_recipes", _find_recipes)
fetch_menu_hints = AsyncAction("barmen/fetch_menu_hints", _fetch_menu_hints)
fetch_guide_step1 = AsyncAction("barmen/fetch_guide_step1", _fetch_guide_step1)
fetch_guide_step2 = AsyncAction("barmen/fetch_guide_step2", _fetch_guide_step2)
fetch_guide_step3 = AsyncAction("barmen/fetch_guide_step3", _fetch_guide_step3)
fetch_wizard_results = AsyncAction("barmen/fetch_wizard_results", _fetch_wizard_results)

clear_search_results = ActionCreator("barmen/clear_search_results")
clear_hints = ActionCreator("barmen/clear_hints")
clear_guide_data = ActionCreator("barmen/clear_guide_data")


@dataclass
class BarmenState:
    # Manual search and wizard results share one container so a single
    # results view can render either
    search: FetchState = field(default_factory=lambda: FetchState(data=[]))
    hints: FetchState = field(default_factory=lambda: FetchState(data=[]))
    guide_step1: FetchState = field(default_factory=lambda: FetchState(data=[]))
    guide_step2: FetchState = field(default_factory=lambda: FetchState(data=[]))
    guide_step3: FetchState = field(default_factory=lambda: FetchState(data=[]))


class BarmenSlice(Slice):
    """Ingredient based recipe search and the three step guide"""

    name = "barmen"
    tracks = {
        find_recipes: "search",
        fetch_wizard_results: "search",
        fetch_menu_hints: "hints",
        fetch_guide_step1: "guide_step1",
        fetch_guide_step2: "guide_step2",
        fetch_guide_step3: "guide_step3",
    }

    def initial_state(self) -> BarmenState:
        return BarmenState()

    @handles(clear_search_results.type)
    def _clear_search_results(self, state, action):
        state.search.reset([])

    @handles(clear_hints.type)
    def _clear_hints(self, state, action):
        state.hints.reset([])

    @handles(clear_guide_data.type)
    def _clear_guide_data(self, state, action):
        state.guide_step1.reset([])
        state.guide_step2.reset([])
        state.guide_step3.reset([])
