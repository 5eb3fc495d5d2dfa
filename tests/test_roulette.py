"""Tests for the roulette flow"""

import random

import pytest
from unittest.mock import AsyncMock, MagicMock

from cocktail_api.client import CocktailApiClient
from cocktail_api.exceptions import ApiRequestError
from companion.roulette import FILTER, MENU, WHEEL, RouletteGame
from state.cocktails import fetch_cocktails
from state.lifecycle import Action, AsyncStatus
from state.selectors import select_roulette_winner
from state.store import Store

COCKTAILS = [{"cocktail_id": i, "name": {"en": f"Cocktail {i}"}} for i in range(1, 6)]


class TestRouletteGame:
    """Test cases for RouletteGame"""

    @pytest.fixture
    def api(self):
        return AsyncMock(spec=CocktailApiClient)

    @pytest.fixture
    def store(self, api):
        store = Store(api)
        store.dispatch(Action(fetch_cocktails.fulfilled, payload=COCKTAILS))
        return store

    @pytest.fixture
    def game(self, store):
        return RouletteGame(store, rng=random.Random(7))

    @pytest.mark.asyncio
    async def test_server_mode_loads_pool(self, game, api):
        api.get_roulette_pool.return_value = COCKTAILS[:3]

        step = await game.select_mode("popular")

        assert step == WHEEL
        api.get_roulette_pool.assert_awaited_once_with("popular", None)
        assert game.pool == COCKTAILS[:3]

    @pytest.mark.asyncio
    async def test_filtered_mode_waits_for_filter(self, game, api):
        api.get_roulette_pool.return_value = COCKTAILS[:2]

        assert await game.select_mode("taste") == FILTER
        api.get_roulette_pool.assert_not_called()

        assert await game.choose_filter("Sweet") == WHEEL
        api.get_roulette_pool.assert_awaited_once_with("taste", "Sweet")

    @pytest.mark.asyncio
    async def test_filter_without_filtered_mode(self, game):
        with pytest.raises(ValueError):
            await game.choose_filter("Sweet")

    @pytest.mark.asyncio
    async def test_unknown_mode(self, game):
        with pytest.raises(ValueError):
            await game.select_mode("lucky")

    @pytest.mark.asyncio
    async def test_pool_failure_returns_to_menu(self, game, store, api):
        api.get_roulette_pool.side_effect = ApiRequestError("No cocktail found", status=404)

        step = await game.select_mode("driver")

        assert step == MENU
        assert game.error == "No cocktail found"
        assert store.state.roulette.pool.status == AsyncStatus.FAILED
        assert game.pool == []

    @pytest.mark.asyncio
    async def test_custom_mode(self, game, store, api):
        await game.select_mode("custom")

        accepted, reason = game.choose_custom([2, 4])

        assert accepted is True
        assert game.step == WHEEL
        assert [c["cocktail_id"] for c in game.pool] == [2, 4]
        assert store.state.roulette.mode == "custom"
        api.get_roulette_pool.assert_not_called()

    @pytest.mark.parametrize("selection", [[], [1], [1, 999], None])
    def test_custom_needs_two(self, game, store, selection):
        accepted, reason = game.choose_custom(selection)

        assert accepted is False
        assert "at least 2" in reason
        assert game.step == MENU
        assert store.state.roulette.pool.status == AsyncStatus.IDLE

    def test_spin_empty_pool(self, game):
        assert game.spin() is None

    def test_spin_picks_winner_before_rotation(self, store):
        rng = MagicMock()
        rng.random.side_effect = [0.99, 0.5]
        game = RouletteGame(store, rng=rng)
        game.choose_custom([1, 2, 3])

        result = game.spin()

        assert result.index == 2
        assert result.winner == COCKTAILS[2]
        assert result.rotation == pytest.approx(6.5)
        assert select_roulette_winner(store.state) == COCKTAILS[2]

    def test_winner_always_from_pool(self, game):
        game.choose_custom([1, 3, 5])

        for _ in range(50):
            result = game.spin()
            assert 0 <= result.index < 3
            assert result.winner in game.pool

    def test_seeded_spins_repeat(self, store):
        def spins(seed):
            game = RouletteGame(store, rng=random.Random(seed))
            game.choose_custom([1, 2, 3, 4, 5])
            return [game.spin().winner["cocktail_id"] for _ in range(10)]

        assert spins(123) == spins(123)

    def test_reset(self, game, store):
        game.choose_custom([1, 2])
        game.spin()

        game.reset()

        assert game.step == MENU
        assert game.mode is None
        assert store.state.roulette.pool.data == []
        assert select_roulette_winner(store.state) is None
