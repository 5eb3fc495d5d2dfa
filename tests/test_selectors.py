"""Tests for state selectors"""

import pytest
from unittest.mock import AsyncMock

from cocktail_api.client import CocktailApiClient
from state import selectors
from state.barmen import find_recipes
from state.cocktails import fetch_cocktails
from state.ingredients import fetch_ingredients
from state.lifecycle import Action
from state.store import Store
from state.ui import ThemeMode, set_theme_mode
from state.user import login_as_guest, set_user

COCKTAILS = [
    {"cocktail_id": 1, "name": {"en": "Mojito", "tr": "Mojito"}},
    {"cocktail_id": 2, "name": {"en": "Negroni"}},
    {"cocktail_id": 3, "name": {"en": "Daiquiri", "de": "Daiquiri"}},
]


class TestSelectors:
    """Test cases for derived views"""

    @pytest.fixture
    def store(self):
        store = Store(AsyncMock(spec=CocktailApiClient))
        store.dispatch(Action(fetch_cocktails.fulfilled, payload=COCKTAILS))
        return store

    def test_select_cocktail_by_id(self, store):
        assert selectors.select_cocktail_by_id(store.state, 2) == COCKTAILS[1]

    def test_select_cocktail_by_id_missing(self, store):
        assert selectors.select_cocktail_by_id(store.state, 999) is None

    def test_select_cocktail_by_id_ignores_detail(self, store):
        store.state.cocktails.detail.data = {"cocktail_id": 42}

        assert selectors.select_cocktail_by_id(store.state, 42) is None

    def test_select_cocktails_by_ids_keeps_list_order(self, store):
        result = selectors.select_cocktails_by_ids(store.state, [3, 1, 77])

        assert [c["cocktail_id"] for c in result] == [1, 3]

    def test_select_cocktail_name(self):
        assert selectors.select_cocktail_name(COCKTAILS[0], "tr-TR") == "Mojito"
        assert selectors.select_cocktail_name(COCKTAILS[1], "de") == "Negroni"
        assert selectors.select_cocktail_name(None, "en") == ""

    def test_status_and_error(self, store):
        assert selectors.get_cocktails_list_status(store.state) == "succeeded"
        assert selectors.get_cocktails_list_error(store.state) is None

    def test_result_sections(self, store):
        store.dispatch(Action(find_recipes.fulfilled, payload=[
            {"cocktail_id": 1, "missing_count": 0},
            {"cocktail_id": 2, "missing_count": 2},
            {"cocktail_id": 3, "missing_count": 5},
            {"cocktail_id": 4},
            {"cocktail_id": 5, "missing_count": 1},
        ]))

        sections = selectors.select_result_sections(store.state)

        assert [s["title"] for s in sections] == ["ready", "almost", "explore"]
        assert [c["cocktail_id"] for c in sections[0]["data"]] == [1, 4]
        assert [c["cocktail_id"] for c in sections[1]["data"]] == [2, 5]
        assert [c["cocktail_id"] for c in sections[2]["data"]] == [3]

    def test_result_sections_skip_empty(self, store):
        store.dispatch(Action(find_recipes.fulfilled, payload=[{"cocktail_id": 1, "missing_count": 4}]))

        assert [s["title"] for s in selectors.select_result_sections(store.state)] == ["explore"]

    def test_ingredients_by_category(self, store):
        store.dispatch(Action(fetch_ingredients.fulfilled, payload=[
            {"ingredient_id": 1, "name": {"en": "Rum"}, "category_name": {"en": "Spirits", "tr": "Alkoller"}},
            {"ingredient_id": 2, "name": {"en": "Lime"}, "category_name": {"en": "Fruit"}},
            {"ingredient_id": 3, "name": {"en": "Gin"}, "category_name": {"en": "Spirits", "tr": "Alkoller"}},
        ]))

        groups = selectors.select_ingredients_by_category(store.state, "tr")

        assert list(groups) == ["Alkoller", "Fruit"]
        assert [i["ingredient_id"] for i in groups["Alkoller"]] == [1, 3]

    def test_user_selectors(self, store):
        assert selectors.select_is_authenticated_or_guest(store.state) is False
        assert selectors.select_user_id(store.state) is None

        store.dispatch(login_as_guest())
        assert selectors.select_is_authenticated_or_guest(store.state) is True
        assert selectors.select_is_pro(store.state) is False

        store.dispatch(set_user({"id": 5, "is_pro": True}))
        assert selectors.select_user_id(store.state) == 5
        assert selectors.select_is_pro(store.state) is True
        assert selectors.select_is_guest(store.state) is False

    @pytest.mark.parametrize("mode, system_scheme, expected", [
        ("light", "dark", ThemeMode.LIGHT),
        ("dark", None, ThemeMode.DARK),
        ("system", "dark", ThemeMode.DARK),
        ("system", "light", ThemeMode.LIGHT),
        ("system", None, ThemeMode.LIGHT),
    ])
    def test_effective_theme(self, store, mode, system_scheme, expected):
        store.dispatch(set_theme_mode(mode))

        assert selectors.select_effective_theme(store.state, system_scheme) == expected

    def test_guide_status_by_step(self, store):
        store.state.barmen.guide_step2.error = "boom"

        assert selectors.get_guide_status(store.state, 1) == "idle"
        assert selectors.get_guide_error(store.state, 2) == "boom"
